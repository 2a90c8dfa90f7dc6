"""Error handling — exception hierarchy shared by the cache and its callers."""

from slidekit.errors.exceptions import (
    CacheIOFailure,
    InvalidInputError,
    RenderFailure,
    SlidekitError,
    ThemeError,
)

__all__ = [
    "SlidekitError",
    "InvalidInputError",
    "RenderFailure",
    "CacheIOFailure",
    "ThemeError",
]
