"""Custom exception hierarchy for slidekit."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class SlidekitError(Exception):
    """Base exception for all slidekit errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(SlidekitError):
    """Rejected request — raised before the filesystem or a renderer is touched.

    Examples: empty diagram source, path-like variant name, unknown kind.
    """

    def __init__(
        self,
        message: str = "",
        field: str = "content",
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class RenderFailure(SlidekitError):
    """External renderer failed — the caller decides whether to continue.

    Examples: non-zero exit, timeout, missing binary, encoder error.
    """

    def __init__(
        self,
        message: str = "",
        kind: str = "",
        content: str = "",
        variant: str | None = None,
        stderr: str | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.content = content
        self.variant = variant
        self.stderr = stderr
        self.original = original


class CacheIOFailure(SlidekitError):
    """Filesystem error inside the cache, fatal for a single resolution only.

    Examples: permission denied creating a directory, disk full on publish.
    """

    def __init__(
        self,
        message: str = "",
        path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original


class ThemeError(SlidekitError):
    """Theme could not be applied to a document or bundle."""

    def __init__(self, message: str = "", theme: str = "") -> None:
        super().__init__(message)
        self.theme = theme
