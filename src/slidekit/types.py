"""Shared Pydantic models for slidekit."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field

# ── Enums ──


class ArtifactKind(StrEnum):
    DIAGRAM = "mermaid"
    QR_CODE = "qr"

    @property
    def prefix(self) -> str:
        """Filename prefix shared by every file of this kind."""
        return self.value


class FailurePolicy(StrEnum):
    KEEP_SOURCE = "keep_source"
    PLACEHOLDER = "placeholder"
    ABORT = "abort"


class ImageFormat(StrEnum):
    SVG = "svg"
    PNG = "png"


# ── Cache models ──


class CacheKey(BaseModel):
    kind: ArtifactKind
    content: str
    variant: str | None = None

    model_config = {"frozen": True}


class CacheEntry(BaseModel):
    """One generated artifact: every output format shares the same stem."""

    key: CacheKey
    digest: str
    variant_dir: Path
    paths: dict[str, Path] = Field(default_factory=dict)
    relative_paths: dict[str, str] = Field(default_factory=dict)
    cached: bool = False

    @property
    def stem(self) -> str:
        return f"{self.key.kind.prefix}-{self.digest}"

    @property
    def primary_format(self) -> str:
        return next(iter(self.paths))

    @property
    def primary_path(self) -> Path:
        return self.paths[self.primary_format]

    @property
    def relative_path(self) -> str:
        return self.relative_paths[self.primary_format]

    def relative_path_for(self, fmt: str) -> str:
        """Relative path for ``fmt``, falling back to the primary format."""
        return self.relative_paths.get(fmt, self.relative_path)


# ── Runtime models ──


class ArtifactFailure(BaseModel):
    kind: ArtifactKind
    content: str
    variant: str | None = None
    message: str

    @property
    def excerpt(self) -> str:
        first_line = self.content.strip().splitlines()[0] if self.content.strip() else ""
        return first_line if len(first_line) <= 60 else first_line[:57] + "..."


class PreprocessResult(BaseModel):
    markdown: str
    artifacts: list[CacheEntry] = Field(default_factory=list)
    failures: list[ArtifactFailure] = Field(default_factory=list)

    @property
    def rendered(self) -> int:
        return sum(1 for a in self.artifacts if not a.cached)

    def save(self, path: str | Path) -> Path:
        """Write the rewritten markdown to ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.markdown, encoding="utf-8")
        return path


class BundleResult(BaseModel):
    theme: str
    output_dir: Path
    presentation: Path
    artifacts: int = 0
    copied_files: list[Path] = Field(default_factory=list)
