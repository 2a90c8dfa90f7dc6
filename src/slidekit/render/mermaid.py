"""Mermaid diagram renderer — shells out to the Mermaid CLI."""

from __future__ import annotations

import logging
import shlex
import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

from slidekit.errors.exceptions import RenderFailure
from slidekit.render.palette import mermaid_theme_for, remap_colors
from slidekit.types import ArtifactKind

logger = logging.getLogger(__name__)


class MermaidRenderer:
    """Renders diagram source to SVG (primary) and PNG via ``mmdc``."""

    kind = ArtifactKind.DIAGRAM
    formats = ("svg", "png")

    def __init__(
        self,
        command: str | Sequence[str] = "mmdc",
        width: int = 1920,
        height: int = 1080,
        scale: int = 2,
        background: str = "transparent",
        timeout: float = 60.0,
    ) -> None:
        self._command = shlex.split(command) if isinstance(command, str) else list(command)
        self._width = width
        self._height = height
        self._scale = scale
        self._background = background
        self._timeout = timeout

    def render(
        self,
        content: str,
        outputs: dict[str, Path],
        variant: str | None = None,
    ) -> None:
        source = remap_colors(content, variant)
        theme = mermaid_theme_for(variant)

        with tempfile.TemporaryDirectory(prefix="slidekit-mermaid-") as td:
            input_path = Path(td) / "diagram.mmd"
            input_path.write_text(source, encoding="utf-8")
            for output in outputs.values():
                self._run(input_path, output, theme, content, variant)

    def build_args(self, input_path: Path, output_path: Path, theme: str) -> list[str]:
        return [
            *self._command,
            "-i", str(input_path),
            "-o", str(output_path),
            "-t", theme,
            "-b", self._background,
            "-w", str(self._width),
            "-H", str(self._height),
            "-s", str(self._scale),
            "-q",
        ]

    def _run(
        self,
        input_path: Path,
        output_path: Path,
        theme: str,
        content: str,
        variant: str | None,
    ) -> None:
        args = self.build_args(input_path, output_path, theme)
        logger.debug("Running %s", shlex.join(args))
        try:
            proc = subprocess.run(args, capture_output=True, text=True, timeout=self._timeout)
        except FileNotFoundError as e:
            raise RenderFailure(
                f"Mermaid CLI not found: {self._command[0]}",
                kind=self.kind.value,
                content=content,
                variant=variant,
                original=e,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise RenderFailure(
                f"Mermaid CLI timed out after {self._timeout:g}s",
                kind=self.kind.value,
                content=content,
                variant=variant,
                original=e,
            ) from e

        if proc.returncode != 0:
            stderr = (proc.stderr or "").strip()
            raise RenderFailure(
                f"Mermaid CLI exited with status {proc.returncode}: {stderr or 'no output'}",
                kind=self.kind.value,
                content=content,
                variant=variant,
                stderr=stderr,
            )
