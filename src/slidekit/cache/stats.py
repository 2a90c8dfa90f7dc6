"""Cache statistics — per-run counters and on-disk inventory."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from slidekit.types import ArtifactKind


class CacheStats(BaseModel):
    """Counters for one ArtifactCache instance."""

    hits: int = 0
    misses: int = 0
    renders: int = 0
    failures: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class CacheInventory(BaseModel):
    """What is currently stored under a cache root."""

    entries: int = 0
    files: int = 0
    size_mb: float = 0.0
    variants: list[str] = []


def scan_cache(root: Path) -> CacheInventory:
    """Walk the cache root and count entries (SVG primaries) and files."""
    if not root.is_dir():
        return CacheInventory()

    entries = 0
    files = 0
    size = 0
    variants: set[str] = set()
    for kind in ArtifactKind:
        kind_dir = root / kind.value
        if not kind_dir.is_dir():
            continue
        for path in kind_dir.rglob(f"{kind.prefix}-*"):
            if not path.is_file():
                continue
            files += 1
            size += path.stat().st_size
            if path.suffix == ".svg":
                entries += 1
            if path.parent != kind_dir:
                variants.add(path.parent.name)

    return CacheInventory(
        entries=entries,
        files=files,
        size_mb=size / (1024 * 1024),
        variants=sorted(variants),
    )
