"""Top-level entry points: create_cache(), preprocess(), export()."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from slidekit.cache.store import ArtifactCache
from slidekit.config.defaults import get_defaults
from slidekit.config.hierarchy import load_config_hierarchy
from slidekit.export.bundle import export_themes
from slidekit.preprocess.markdown import preprocess_file
from slidekit.render.mermaid import MermaidRenderer
from slidekit.render.qr import QRCodeRenderer
from slidekit.types import BundleResult, PreprocessResult

logger = logging.getLogger(__name__)


def create_cache(config: dict[str, Any] | None = None, **overrides: Any) -> ArtifactCache:
    """Build an ArtifactCache with the Mermaid and QR renderers from a config dict."""
    merged = get_defaults()
    merged.update(config or {})
    merged.update({k: v for k, v in overrides.items() if v is not None})

    renderers = [
        MermaidRenderer(
            command=merged["mermaid_command"],
            width=merged["mermaid_width"],
            height=merged["mermaid_height"],
            scale=merged["mermaid_scale"],
            timeout=merged["render_timeout"],
        ),
        QRCodeRenderer(size=merged["qr_size"]),
    ]
    logger.debug("Artifact cache rooted at %s", merged["cache_dir"])
    return ArtifactCache(Path(merged["cache_dir"]), renderers)


# ── Module-level convenience functions ──


def preprocess(
    input_path: str | Path,
    output_path: str | Path | None = None,
    theme: str | None = None,
    on_error: str | None = None,
    cache_dir: str | Path | None = None,
    image_format: str | None = None,
    config_file: str | Path | None = None,
    cache: ArtifactCache | None = None,
) -> PreprocessResult:
    """Preprocess one markdown file using the layered configuration.

    Pass ``cache`` to reuse an existing cache (and its statistics) instead of
    building one from ``cache_dir`` and the renderer settings.
    """
    config = load_config_hierarchy(
        config_file, cache_dir=cache_dir, on_error=on_error, image_format=image_format
    )
    if cache is None:
        cache = create_cache(config)
    return preprocess_file(
        input_path,
        cache,
        output_path,
        variant=theme,
        on_error=config["on_error"],
        image_base=config["image_base"],
        image_format=config["image_format"],
    )


def export(
    input_path: str | Path,
    themes: list[str] | None = None,
    dist_dir: str | Path | None = None,
    cache_dir: str | Path | None = None,
    themes_dir: str | Path | None = None,
    image_format: str | None = None,
    config_file: str | Path | None = None,
    cache: ArtifactCache | None = None,
) -> list[BundleResult]:
    """Build one export bundle per theme using the layered configuration."""
    config = load_config_hierarchy(
        config_file,
        themes=themes or None,
        dist_dir=dist_dir,
        cache_dir=cache_dir,
        themes_dir=themes_dir,
        image_format=image_format,
    )
    if cache is None:
        cache = create_cache(config)
    return export_themes(
        input_path,
        config["themes"],
        config["dist_dir"],
        cache,
        themes_dir=config["themes_dir"],
        image_base=config["image_base"],
        image_format=config["image_format"],
    )
