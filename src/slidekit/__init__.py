"""slidekit — cached diagram and QR rendering for markdown slide decks."""

from slidekit.cache.store import ArtifactCache
from slidekit.core import create_cache, export, preprocess
from slidekit.errors.exceptions import (
    CacheIOFailure,
    InvalidInputError,
    RenderFailure,
    SlidekitError,
    ThemeError,
)
from slidekit.preprocess.markdown import flatten_variant_paths, preprocess_markdown
from slidekit.types import ArtifactKind, CacheEntry, CacheKey, FailurePolicy, PreprocessResult

__version__ = "0.1.0"

__all__ = [
    "ArtifactCache",
    "ArtifactKind",
    "CacheEntry",
    "CacheKey",
    "FailurePolicy",
    "PreprocessResult",
    "SlidekitError",
    "InvalidInputError",
    "RenderFailure",
    "CacheIOFailure",
    "ThemeError",
    "create_cache",
    "export",
    "flatten_variant_paths",
    "preprocess",
    "preprocess_markdown",
]
