"""Layered settings for slidekit.

Sources, lowest priority first:
  1. Package defaults
  2. User config      (~/.slidekit/config.yaml)
  3. Project config   (nearest slidekit.yaml from cwd upward, or an explicit file)
  4. SLIDEKIT_* environment variables
  5. Runtime overrides (CLI options); ``None`` means "not given"
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from slidekit.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".slidekit" / "config.yaml"
_PROJECT_CONFIG_NAME = "slidekit.yaml"
_ENV_PREFIX = "SLIDEKIT_"

# Numeric settings; everything else stays a string
_TYPE_MAP: dict[str, type] = {
    "mermaid_width": int,
    "mermaid_height": int,
    "mermaid_scale": int,
    "render_timeout": float,
    "qr_size": int,
}

# Comma-separated list values
_LIST_KEYS = {"themes"}


def load_config_hierarchy(
    config_file: str | Path | None = None,
    **runtime_overrides: Any,
) -> dict[str, Any]:
    """Merge every settings source into one flat dict.

    ``config_file`` replaces the project-file search when given. Keys that
    no default defines are ignored with a warning.
    """
    config = get_defaults()
    project_path = Path(config_file) if config_file else _find_project_config()

    layers = [
        (str(_GLOBAL_CONFIG_PATH), _load_yaml_config(_GLOBAL_CONFIG_PATH)),
        (str(project_path), _load_yaml_config(project_path) if project_path else None),
        ("environment", _load_env_vars(config)),
        ("runtime", {k: v for k, v in runtime_overrides.items() if v is not None}),
    ]
    for source, values in layers:
        if not values:
            continue
        for key, value in values.items():
            if key not in config:
                logger.warning("Unknown config key '%s' in %s, ignoring", key, source)
                continue
            config[key] = value
        logger.debug("Applied config from %s", source)

    return config


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Parse a YAML mapping, or return ``None`` when the file is missing or unusable."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring", path)
        return None
    return data


def _find_project_config() -> Path | None:
    """Nearest slidekit.yaml in cwd or any parent."""
    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        candidate = directory / _PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None


def _load_env_vars(known: dict[str, Any]) -> dict[str, Any]:
    """SLIDEKIT_<KEY> for every known key, e.g. SLIDEKIT_CACHE_DIR -> cache_dir."""
    return {
        key: _coerce_env_value(key, os.environ[name])
        for key in known
        if (name := _ENV_PREFIX + key.upper()) in os.environ
    }


def _coerce_env_value(key: str, value: str) -> Any:
    """Turn an environment string into the type the setting expects."""
    if key in _LIST_KEYS:
        return [item.strip() for item in value.split(",") if item.strip()]

    target_type = _TYPE_MAP.get(key)
    if target_type is None:
        return value
    try:
        return target_type(value)
    except ValueError:
        logger.warning(
            "Cannot read %s%s=%r as %s", _ENV_PREFIX, key.upper(), value, target_type.__name__
        )
        return value
