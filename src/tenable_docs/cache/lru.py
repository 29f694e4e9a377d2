"""In-memory LRU cache with per-entry time-to-live."""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypedDict, TypeVar

from url_normalize import url_normalize

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_SIZE = 100
DEFAULT_TTL_SECONDS = 24 * 60 * 60.0


@dataclass
class CacheEntry(Generic[T]):
    """A cached value and its bookkeeping."""

    data: T
    created_at: float
    hit_count: int = 0


class CacheStats(TypedDict):
    """Snapshot returned by LRUCache.stats()."""

    size: int
    max_size: int
    keys: list[str]
    total_hits: int


class LRUCache(Generic[T]):
    """
    Bounded cache evicting the least recently used entry, with lazy TTL
    expiry.

    Recency lives in the OrderedDict itself: the first key is the least
    recently used, and ``get`` moves a hit to the end.

    Example:
        cache: LRUCache[ReadPageOutput] = LRUCache(max_size=50, ttl=3600)
        cache.set(url, page)
        page = cache.get(url)
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries (must be positive)
            ttl: Seconds an entry stays valid
            clock: Time source, in seconds
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry[T]] = OrderedDict()

    def _expired(self, entry: CacheEntry[T]) -> bool:
        return self._clock() - entry.created_at > self.ttl

    def get(self, key: str) -> Optional[T]:
        """Return the value for key, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._expired(entry):
            del self._entries[key]
            return None

        entry.hit_count += 1
        self._entries.move_to_end(key)
        logger.debug(f"Cache hit: {key}")
        return entry.data

    def set(self, key: str, value: T) -> None:
        """Store value under key as the most recently used entry."""
        self._entries.pop(key, None)
        if len(self._entries) >= self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted least recently used entry: {evicted}")
        self._entries[key] = CacheEntry(data=value, created_at=self._clock())

    def has(self, key: str) -> bool:
        """True if key holds a live entry. Does not change recency."""
        entry = self._entries.get(key)
        if entry is None:
            return False
        if self._expired(entry):
            del self._entries[key]
            return False
        return True

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def cleanup(self) -> int:
        """
        Remove all expired entries.

        Returns:
            Number of entries removed
        """
        expired = [key for key, entry in self._entries.items() if self._expired(entry)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info(f"Evicted {len(expired)} expired cache entries")
        return len(expired)

    def stats(self) -> CacheStats:
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "keys": list(self._entries),
            "total_hits": sum(entry.hit_count for entry in self._entries.values()),
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)


def cache_key(url: str, **params: object) -> str:
    """
    Build a cache key from a URL and optional parameters.

    The URL is normalized so trivially different spellings share an entry;
    parameters are appended as sorted ``key:value`` pairs joined by ``|``.

    Args:
        url: Page URL
        **params: Extra values that change the cached result

    Returns:
        Cache key string
    """
    normalized = url_normalize(url) or url
    if not params:
        return normalized
    suffix = "|".join(f"{key}:{params[key]}" for key in sorted(params))
    return f"{normalized}|{suffix}"
