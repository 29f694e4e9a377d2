"""Tests for the LRU/TTL result cache."""

import pytest
from tenable_docs.cache import LRUCache, cache_key


class FakeClock:
    """Manually advanced time source."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


class TestLRUCache:
    """Tests for LRUCache."""

    def test_get_and_set(self, clock):
        """Test basic storage and retrieval."""
        cache = LRUCache(max_size=3, ttl=60, clock=clock)
        cache.set("a", 1)

        assert cache.get("a") == 1
        assert cache.get("missing") is None
        assert len(cache) == 1

    def test_evicts_least_recently_used(self, clock):
        """Test that the entry untouched longest is evicted."""
        cache = LRUCache(max_size=2, ttl=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)

        assert "b" not in cache
        assert cache.get("a") == 1
        assert cache.get("c") == 3

    def test_reinsert_does_not_evict(self, clock):
        """Test that overwriting a key at capacity keeps the other entries."""
        cache = LRUCache(max_size=2, ttl=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)

        assert len(cache) == 2
        assert cache.get("a") == 10
        assert cache.get("b") == 2

    def test_size_never_exceeds_max(self, clock):
        """Test the capacity bound."""
        cache = LRUCache(max_size=5, ttl=60, clock=clock)
        for i in range(50):
            cache.set(f"k{i}", i)
            assert len(cache) <= 5
        assert cache.stats()["keys"] == ["k45", "k46", "k47", "k48", "k49"]

    def test_entries_expire(self, clock):
        """Test that entries older than the TTL are not returned."""
        cache = LRUCache(max_size=3, ttl=10, clock=clock)
        cache.set("a", 1)

        clock.now = 10.0
        assert cache.get("a") == 1

        clock.now = 10.5
        assert cache.get("a") is None
        assert len(cache) == 0

    def test_has_does_not_promote(self, clock):
        """Test that has() leaves recency unchanged."""
        cache = LRUCache(max_size=2, ttl=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.has("a") is True
        cache.set("c", 3)

        assert cache.has("a") is False
        assert cache.has("b") is True

    def test_has_respects_ttl(self, clock):
        """Test that has() reports expired entries as absent."""
        cache = LRUCache(max_size=2, ttl=5, clock=clock)
        cache.set("a", 1)
        clock.now = 6.0

        assert cache.has("a") is False

    def test_delete_and_clear(self, clock):
        """Test explicit removal."""
        cache = LRUCache(max_size=3, ttl=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.delete("a") is True
        assert cache.delete("a") is False
        cache.clear()
        assert len(cache) == 0

    def test_cleanup_removes_only_expired(self, clock):
        """Test that cleanup evicts expired entries and reports the count."""
        cache = LRUCache(max_size=5, ttl=10, clock=clock)
        cache.set("old1", 1)
        cache.set("old2", 2)
        clock.now = 8.0
        cache.set("fresh", 3)
        clock.now = 12.0

        assert cache.cleanup() == 2
        assert cache.stats()["keys"] == ["fresh"]

    def test_stats(self, clock):
        """Test the stats snapshot."""
        cache = LRUCache(max_size=4, ttl=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.get("a")
        cache.get("b")

        stats = cache.stats()

        assert stats == {"size": 2, "max_size": 4, "keys": ["a", "b"], "total_hits": 3}

    def test_invalid_size(self):
        """Test that a non-positive capacity is rejected."""
        with pytest.raises(ValueError):
            LRUCache(max_size=0)


class TestCacheKey:
    """Tests for cache_key."""

    def test_equivalent_urls_share_key(self):
        """Test that scheme and host case do not change the key."""
        assert cache_key("HTTPS://Developer.Tenable.com/reference") == cache_key(
            "https://developer.tenable.com/reference"
        )

    def test_params_sorted(self):
        """Test that parameters are appended in sorted order."""
        key = cache_key("https://developer.tenable.com/reference", timeout=5, format="md")
        assert key.endswith("|format:md|timeout:5")
        assert key == cache_key("https://developer.tenable.com/reference", format="md", timeout=5)
