"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Cache and document layout
DEFAULT_CACHE_DIR = "slides/images"
DEFAULT_IMAGE_BASE = "images"
DEFAULT_IMAGE_FORMAT = "svg"
DEFAULT_ON_ERROR = "keep_source"

# Mermaid CLI settings
DEFAULT_MERMAID_COMMAND = "mmdc"
DEFAULT_MERMAID_WIDTH = 1920
DEFAULT_MERMAID_HEIGHT = 1080
DEFAULT_MERMAID_SCALE = 2
DEFAULT_RENDER_TIMEOUT = 60.0

# QR settings
DEFAULT_QR_SIZE = 300

# Theme export
DEFAULT_THEMES = ["rose-pine-dawn", "rose-pine-moon"]
DEFAULT_DIST_DIR = "dist"

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_dir": DEFAULT_CACHE_DIR,
        "image_base": DEFAULT_IMAGE_BASE,
        "image_format": DEFAULT_IMAGE_FORMAT,
        "on_error": DEFAULT_ON_ERROR,
        "mermaid_command": DEFAULT_MERMAID_COMMAND,
        "mermaid_width": DEFAULT_MERMAID_WIDTH,
        "mermaid_height": DEFAULT_MERMAID_HEIGHT,
        "mermaid_scale": DEFAULT_MERMAID_SCALE,
        "render_timeout": DEFAULT_RENDER_TIMEOUT,
        "qr_size": DEFAULT_QR_SIZE,
        "themes": list(DEFAULT_THEMES),
        "themes_dir": None,
        "dist_dir": DEFAULT_DIST_DIR,
        "log_level": DEFAULT_LOG_LEVEL,
    }
