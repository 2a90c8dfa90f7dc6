"""Renderer interface consumed by the artifact cache."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from slidekit.types import ArtifactKind


@runtime_checkable
class Renderer(Protocol):
    """Turns source text into one file per format.

    ``formats`` lists file extensions, primary first. ``render`` receives a
    mapping of format to output path and must write every one of them or
    raise :class:`~slidekit.errors.RenderFailure`.
    """

    kind: ArtifactKind
    formats: tuple[str, ...]

    def render(
        self,
        content: str,
        outputs: dict[str, Path],
        variant: str | None = None,
    ) -> None: ...
