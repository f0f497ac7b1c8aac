"""Markup store - lightweight wrapper around the generic LRU cache."""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .core import Algorithm, LRUCache, Record, Stats
from .errors import RenderCacheError
from .models import LRUCacheSettings
from .templating import CompiledTemplate

MILLISECONDS_IN_ONE_SECOND = 1000


class UnsupportedStoreOperation(RenderCacheError, NotImplementedError):
    """A substituted store does not implement the requested operation."""


@dataclass(frozen=True)
class CacheEntry:
    """Markup produced on a miss, with the root id it was rendered under."""

    raw_markup: str
    compiled_template: CompiledTemplate | None
    root_id: str | int


@runtime_checkable
class CacheStore(Protocol):
    """Minimum a substituted store has to provide."""

    def get(self, key: str) -> CacheEntry | None: ...

    def set(self, key: str, entry: CacheEntry) -> Any: ...


class LRUStore:
    """
    Default store: bounded by entry count and entry age.

    Wrapper around core.LRUCache with CacheEntry type enforcement.
    """

    def __init__(
        self,
        max_size: int = 500,
        max_age_ms: int | None = None,
        hash_keys: bool = True,
    ) -> None:
        """
        Initialize store.

        Args:
            max_size: Maximum cached entries
            max_age_ms: Entry lifetime in milliseconds (None = no expiry)
            hash_keys: File entries under xxhash digests of their keys
        """
        self._cache: LRUCache[CacheEntry] = LRUCache(
            max_size=max_size,
            ttl_seconds=max_age_ms / MILLISECONDS_IN_ONE_SECOND if max_age_ms else None,
            hash_algorithm=Algorithm.XXHASH64 if hash_keys else None,
        )

    @classmethod
    def from_settings(cls, settings: LRUCacheSettings, hash_keys: bool = True) -> "LRUStore":
        return cls(max_size=settings.max, max_age_ms=settings.max_age, hash_keys=hash_keys)

    def get(self, key: str) -> CacheEntry | None:
        """Get entry if present and not expired."""
        return self._cache.get(key)

    def set(self, key: str, entry: CacheEntry) -> None:
        """Store entry, replacing any previous one under the key."""
        if not isinstance(entry, CacheEntry):
            raise TypeError(f"Expected CacheEntry, got {type(entry).__name__}")
        self._cache.set(key, entry)

    def dump(self) -> list[Record[CacheEntry]]:
        """Live entries, most recently used first."""
        return self._cache.dump()

    @property
    def length(self) -> int:
        return len(self._cache)

    def __len__(self) -> int:
        return len(self._cache)

    def reset(self) -> None:
        """Drop every entry."""
        self._cache.clear()

    @property
    def stats(self) -> Stats:
        """Get cache statistics."""
        return self._cache.stats


def store_dump(store: CacheStore) -> Any:
    dump = getattr(store, "dump", None)
    if not callable(dump):
        raise UnsupportedStoreOperation(f"{type(store).__name__} does not support dump()")
    return dump()


def store_length(store: CacheStore) -> Any:
    if hasattr(store, "length"):
        return store.length
    if hasattr(store, "__len__"):
        return len(store)  # type: ignore[arg-type]
    raise UnsupportedStoreOperation(f"{type(store).__name__} does not report its length")


def store_reset(store: CacheStore) -> Any:
    reset = getattr(store, "reset", None)
    if not callable(reset):
        raise UnsupportedStoreOperation(f"{type(store).__name__} does not support reset()")
    return reset()


__all__ = [
    "CacheEntry",
    "CacheStore",
    "LRUStore",
    "UnsupportedStoreOperation",
    "store_dump",
    "store_length",
    "store_reset",
]
