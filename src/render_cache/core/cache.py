"""Generic LRU cache with max age and statistics.

Bounded by entry count and by age since insertion. Entries read after they
expire are dropped and reported as absent.
"""

import time
from collections.abc import Callable
from typing import Generic, TypeVar, Any
from collections import OrderedDict
from dataclasses import dataclass

from .hash import hash_string, Algorithm

T = TypeVar("T")


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Export as dictionary."""
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "hit_rate": self.hit_rate,
        }


@dataclass(frozen=True)
class Record(Generic[T]):
    """A dumped cache entry."""

    key: str
    value: T
    inserted_at: float


class LRUCache(Generic[T]):
    """
    LRU cache with max-age support and statistics tracking.

    Examples:
        >>> cache = LRUCache[str](max_size=100, ttl_seconds=3600)
        >>> cache.set("key", "value")
        >>> cache.get("key")
        'value'
        >>> cache.stats.hit_rate
        1.0
    """

    def __init__(
        self,
        max_size: int = 500,
        ttl_seconds: float | None = None,
        hash_algorithm: Algorithm | None = Algorithm.XXHASH64,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize LRU cache.

        Args:
            max_size: Maximum number of entries
            ttl_seconds: Max age in seconds (None = no expiration)
            hash_algorithm: Algorithm for computing internal keys (None = use keys as given)
            clock: Time source, in seconds
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self.hash_algorithm = hash_algorithm
        self._clock = clock

        # internal key -> (original key, value, inserted at)
        self._cache: OrderedDict[str, tuple[str, T, float]] = OrderedDict()
        self._stats = Stats(max_size=max_size)

    def _compute_key(self, key: str) -> str:
        if self.hash_algorithm is None:
            return key
        return hash_string(key, self.hash_algorithm, truncate=16)

    def _is_expired(self, timestamp: float) -> bool:
        if self.ttl_seconds is None:
            return False
        return self._clock() - timestamp >= self.ttl_seconds

    def get(self, key: str) -> T | None:
        """
        Get cached value if available and not expired.

        Returns:
            Cached value or None if not found/expired
        """
        cache_key = self._compute_key(key)

        if cache_key in self._cache:
            _, value, timestamp = self._cache[cache_key]

            if self._is_expired(timestamp):
                del self._cache[cache_key]
                self._stats.size = len(self._cache)
                self._stats.expirations += 1
                self._stats.misses += 1
                return None

            # Valid hit - move to end (most recently used)
            self._cache.move_to_end(cache_key)
            self._stats.hits += 1
            return value

        self._stats.misses += 1
        return None

    def set(self, key: str, value: T) -> None:
        """Cache value with current timestamp, replacing any previous entry."""
        cache_key = self._compute_key(key)

        if cache_key in self._cache:
            del self._cache[cache_key]

        self._cache[cache_key] = (key, value, self._clock())

        # Evict least recently used
        while len(self._cache) > self.max_size:
            self._cache.popitem(last=False)
            self._stats.evictions += 1

        self._stats.size = len(self._cache)

    def prune(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        expired = [k for k, (_, _, ts) in self._cache.items() if self._is_expired(ts)]
        for cache_key in expired:
            del self._cache[cache_key]
        self._stats.expirations += len(expired)
        self._stats.size = len(self._cache)
        return len(expired)

    def dump(self) -> list[Record[T]]:
        """Live entries, most recently used first."""
        self.prune()
        return [
            Record(key=key, value=value, inserted_at=ts)
            for key, value, ts in reversed(self._cache.values())
        ]

    def clear(self) -> None:
        """Clear entire cache."""
        self._cache.clear()
        self._stats.size = 0

    @property
    def stats(self) -> Stats:
        """Get cache statistics."""
        return self._stats

    def __len__(self) -> int:
        """Return number of cached entries (expired ones included until read)."""
        return len(self._cache)


__all__ = ["LRUCache", "Record", "Stats"]
