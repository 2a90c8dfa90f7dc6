"""Content-addressed artifact cache backed by the filesystem."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from slidekit.cache.keys import fingerprint, make_cache_key
from slidekit.cache.stats import CacheStats
from slidekit.errors.exceptions import CacheIOFailure, InvalidInputError, RenderFailure
from slidekit.render.base import Renderer
from slidekit.types import ArtifactKind, CacheEntry, CacheKey

logger = logging.getLogger(__name__)


class ArtifactCache:
    """Maps (kind, content, variant) to generated files under ``root``.

    Layout: ``{root}/{kind}/[{variant}/]{prefix}-{digest}.{ext}``. An entry
    exists once its primary file is on disk; files are never deleted here.
    """

    def __init__(self, root: str | Path, renderers: Iterable[Renderer]) -> None:
        self._root = Path(root)
        self._renderers: dict[ArtifactKind, Renderer] = {r.kind: r for r in renderers}
        self._stats = CacheStats()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def kinds(self) -> list[ArtifactKind]:
        return list(self._renderers)

    def stats(self) -> CacheStats:
        return self._stats.model_copy()

    def resolve(
        self,
        kind: ArtifactKind | str,
        content: str,
        variant: str | None = None,
    ) -> str:
        """Return the primary artifact path relative to the root, rendering on a miss."""
        return self.resolve_entry(kind, content, variant).relative_path

    def resolve_entry(
        self,
        kind: ArtifactKind | str,
        content: str,
        variant: str | None = None,
    ) -> CacheEntry:
        """Like :meth:`resolve` but returns every output path of the entry."""
        key = make_cache_key(kind, content, variant)
        renderer = self._renderers.get(key.kind)
        if renderer is None:
            raise InvalidInputError(
                f"No renderer registered for '{key.kind.value}'", field="kind", value=key.kind
            )

        entry = self.locate(key, renderer.formats)

        try:
            hit = entry.primary_path.is_file()
        except OSError as e:
            self._stats.failures += 1
            raise CacheIOFailure(
                f"Cannot check {entry.primary_path}: {e}", path=entry.primary_path, original=e
            ) from e

        if hit:
            self._stats.hits += 1
            logger.debug("Cache hit: %s", entry.relative_path)
            return entry.model_copy(update={"cached": True})

        self._stats.misses += 1
        try:
            entry.variant_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._stats.failures += 1
            raise CacheIOFailure(
                f"Cannot create {entry.variant_dir}: {e}", path=entry.variant_dir, original=e
            ) from e

        try:
            self._render(renderer, entry)
        except (RenderFailure, CacheIOFailure):
            self._stats.failures += 1
            raise

        self._stats.renders += 1
        logger.info("Generated %s", entry.relative_path)
        return entry

    def locate(self, key: CacheKey, formats: tuple[str, ...]) -> CacheEntry:
        """Compute where an entry lives without touching the filesystem."""
        digest = fingerprint(key.content)
        variant_dir = self._root / key.kind.value
        if key.variant:
            variant_dir = variant_dir / key.variant

        stem = f"{key.kind.prefix}-{digest}"
        paths = {fmt: variant_dir / f"{stem}.{fmt}" for fmt in formats}
        return CacheEntry(
            key=key,
            digest=digest,
            variant_dir=variant_dir,
            paths=paths,
            relative_paths={
                fmt: path.relative_to(self._root).as_posix() for fmt, path in paths.items()
            },
        )

    def _render(self, renderer: Renderer, entry: CacheEntry) -> None:
        """Render into temp files, then publish secondaries first and the primary last."""
        key = entry.key
        temps: dict[str, Path] = {}
        try:
            for fmt in entry.paths:
                fd, name = tempfile.mkstemp(
                    prefix=f".{entry.stem}-", suffix=f".{fmt}", dir=entry.variant_dir
                )
                os.close(fd)
                temps[fmt] = Path(name)

            try:
                renderer.render(key.content, temps, variant=key.variant)
            except RenderFailure as e:
                e.kind = e.kind or key.kind.value
                e.content = e.content or key.content
                e.variant = e.variant or key.variant
                raise
            except Exception as e:
                raise RenderFailure(
                    f"{key.kind.value} renderer error: {e}",
                    kind=key.kind.value,
                    content=key.content,
                    variant=key.variant,
                    original=e,
                ) from e

            for fmt, tmp in temps.items():
                if tmp.stat().st_size == 0:
                    raise RenderFailure(
                        f"{key.kind.value} renderer produced no {fmt} output",
                        kind=key.kind.value,
                        content=key.content,
                        variant=key.variant,
                    )

            for fmt in reversed(list(temps)):
                os.replace(temps[fmt], entry.paths[fmt])
        except OSError as e:
            raise CacheIOFailure(
                f"Cannot write {entry.relative_path}: {e}", path=entry.primary_path, original=e
            ) from e
        finally:
            for tmp in temps.values():
                tmp.unlink(missing_ok=True)
