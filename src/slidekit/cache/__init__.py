"""Cache subsystem — content-addressed artifact files on disk."""

from slidekit.cache.keys import fingerprint, make_cache_key, validate_variant
from slidekit.cache.stats import CacheInventory, CacheStats, scan_cache
from slidekit.cache.store import ArtifactCache

__all__ = [
    "ArtifactCache",
    "CacheInventory",
    "CacheStats",
    "fingerprint",
    "make_cache_key",
    "scan_cache",
    "validate_variant",
]
