"""Tests for cache module."""

import pytest
from hypothesis import given, strategies as st

from render_cache.core.cache import LRUCache, Record


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_lru_basic():
    """Test basic cache operations."""
    cache = LRUCache[str](max_size=3)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    cache.set("c", "value_c")

    assert cache.get("a") == "value_a"
    assert cache.get("b") == "value_b"
    assert cache.get("c") == "value_c"
    assert len(cache) == 3


def test_lru_eviction():
    """Test LRU eviction on size limit."""
    cache = LRUCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    cache.set("c", "value_c")  # Should evict "a"

    assert cache.get("a") is None
    assert cache.get("b") == "value_b"
    assert cache.get("c") == "value_c"
    assert len(cache) == 2


def test_lru_order():
    """Test LRU ordering (most recently used stays)."""
    cache = LRUCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")

    # Access "a" to make it most recent
    _ = cache.get("a")

    # Add "c" - should evict "b" (least recent)
    cache.set("c", "value_c")

    assert cache.get("a") == "value_a"
    assert cache.get("b") is None
    assert cache.get("c") == "value_c"


def test_lru_max_age():
    """Test entries expire after their max age."""
    clock = FakeClock()
    cache = LRUCache[str](max_size=10, ttl_seconds=60, clock=clock)

    cache.set("key", "value")
    clock.advance(59)
    assert cache.get("key") == "value"

    clock.advance(1)
    assert cache.get("key") is None
    assert len(cache) == 0
    assert cache.stats.expirations == 1


def test_max_age_counts_from_insertion():
    """Test reads do not extend an entry's lifetime."""
    clock = FakeClock()
    cache = LRUCache[str](max_size=10, ttl_seconds=10, clock=clock)

    cache.set("key", "value")
    for _ in range(3):
        clock.advance(3)
        assert cache.get("key") == "value"

    clock.advance(1)
    assert cache.get("key") is None


def test_lru_update():
    """Test updating existing entry."""
    cache = LRUCache[str](max_size=10)

    cache.set("key", "value1")
    cache.set("key", "value2")

    assert cache.get("key") == "value2"
    assert len(cache) == 1


def test_lru_clear():
    """Test clearing cache."""
    cache = LRUCache[str](max_size=10)

    cache.set("a", "value_a")
    cache.set("b", "value_b")

    cache.clear()

    assert len(cache) == 0
    assert cache.get("a") is None


def test_dump_skips_expired():
    """Test dump returns live records, most recent first."""
    clock = FakeClock()
    cache = LRUCache[str](max_size=10, ttl_seconds=5, clock=clock)

    cache.set("old", "value_old")
    clock.advance(4)
    cache.set("a", "value_a")
    cache.set("b", "value_b")
    clock.advance(1)

    assert cache.dump() == [
        Record(key="b", value="value_b", inserted_at=1004.0),
        Record(key="a", value="value_a", inserted_at=1004.0),
    ]
    assert len(cache) == 2


def test_unhashed_keys():
    """Test keys are used verbatim without a hash algorithm."""
    cache = LRUCache[str](max_size=10, hash_algorithm=None)

    cache.set("Greeter:A", "markup")

    assert "Greeter:A" in cache._cache
    assert cache.get("Greeter:A") == "markup"


def test_stats_hit_miss():
    """Test statistics tracking."""
    cache = LRUCache[str](max_size=10)

    cache.set("key", "value")

    _ = cache.get("key")  # Hit
    _ = cache.get("missing")  # Miss

    stats = cache.stats
    assert stats.hits == 1
    assert stats.misses == 1
    assert stats.hit_rate == 0.5


def test_stats_eviction():
    """Test eviction tracking."""
    cache = LRUCache[str](max_size=2)

    cache.set("a", "value_a")
    cache.set("b", "value_b")
    cache.set("c", "value_c")  # Eviction

    assert cache.stats.evictions == 1


def test_stats_to_dict():
    """Test stats export."""
    cache = LRUCache[str](max_size=10)

    cache.set("key", "value")
    _ = cache.get("key")

    stats_dict = cache.stats.to_dict()

    assert isinstance(stats_dict, dict)
    assert "hits" in stats_dict
    assert "misses" in stats_dict
    assert "expirations" in stats_dict
    assert "hit_rate" in stats_dict


def test_invalid_arguments():
    """Test validation."""
    with pytest.raises(ValueError):
        LRUCache[str](max_size=0)

    with pytest.raises(ValueError):
        LRUCache[str](max_size=-1)

    with pytest.raises(ValueError):
        LRUCache[str](max_size=1, ttl_seconds=0)


@given(st.lists(st.text(min_size=1, max_size=10), min_size=1, max_size=50))
def test_cache_preserves_values(keys):
    """Property test: cache preserves values correctly."""
    cache = LRUCache[str](max_size=100)

    for key in keys:
        cache.set(key, f"value_{key}")

    for key in keys:
        assert cache.get(key) == f"value_{key}"


@given(st.lists(st.integers(min_value=0, max_value=20), max_size=100), st.integers(1, 10))
def test_cache_never_exceeds_max_size(keys, max_size):
    """Property test: size stays bounded and the newest key is always present."""
    cache = LRUCache[int](max_size=max_size)

    for key in keys:
        cache.set(str(key), key)
        assert len(cache) <= max_size
        assert cache.get(str(key)) == key
