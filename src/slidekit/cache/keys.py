"""Cache key generation — content-addressed, variant-partitioned."""

from __future__ import annotations

import hashlib
import re

from slidekit.errors.exceptions import InvalidInputError
from slidekit.types import ArtifactKind, CacheKey

# 16 hex chars = 64 bits of SHA-256. Collisions are not detected; the odds
# for n distinct artifacts are roughly n**2 / 2**65.
DIGEST_LENGTH = 16

_VARIANT_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def fingerprint(content: str) -> str:
    """Truncated SHA-256 of the content, stable across processes."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:DIGEST_LENGTH]


def validate_variant(variant: str | None) -> str | None:
    """Return the variant unchanged, or raise if it is unsafe as a path segment."""
    if variant is None:
        return None
    if not isinstance(variant, str) or not _VARIANT_RE.match(variant) or variant in {".", ".."}:
        raise InvalidInputError(
            f"Invalid variant name: {variant!r}", field="variant", value=variant
        )
    return variant


def make_cache_key(
    kind: ArtifactKind | str,
    content: str,
    variant: str | None = None,
) -> CacheKey:
    """Validate a (kind, content, variant) triple and build its key."""
    try:
        kind = ArtifactKind(kind)
    except ValueError:
        raise InvalidInputError(f"Unknown artifact kind: {kind!r}", field="kind", value=kind)

    if not isinstance(content, str) or not content.strip():
        raise InvalidInputError(
            f"Empty {kind.value} content", field="content", value=content
        )

    return CacheKey(kind=kind, content=content, variant=validate_variant(variant))
