"""Configuration — layered defaults, YAML files and environment."""

from slidekit.config.hierarchy import load_config_hierarchy

__all__ = ["load_config_hierarchy"]
