"""Result caching for tenable_docs."""

from .lru import DEFAULT_MAX_SIZE, DEFAULT_TTL_SECONDS, CacheEntry, CacheStats, LRUCache, cache_key

__all__ = [
    "LRUCache",
    "CacheEntry",
    "CacheStats",
    "cache_key",
    "DEFAULT_MAX_SIZE",
    "DEFAULT_TTL_SECONDS",
]
