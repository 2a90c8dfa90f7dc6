"""Theme export — multi-theme bundle assembly."""

from slidekit.export.bundle import build_theme_bundle, export_themes, replace_theme

__all__ = ["build_theme_bundle", "export_themes", "replace_theme"]
