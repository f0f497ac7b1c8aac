"""Fast hashing for store keys.

Cache keys built from serialized properties can be arbitrarily long; the
default store files entries under a short xxhash digest instead.
"""

from typing import Protocol
from enum import Enum
import hashlib

import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # Fast, non-cryptographic (store keys)
    SHA256 = "sha256"      # Slower, collision resistant


class Hasher(Protocol):
    """Protocol for hash implementations."""

    def digest(self, data: bytes) -> str:
        """Compute hex digest of data."""
        ...


class XXHasher:
    """Non-cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return xxhash.xxh64(data).hexdigest()


class SHA256Hasher:
    """Cryptographic hasher."""

    def digest(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()


_HASHERS: dict[Algorithm, Hasher] = {
    Algorithm.XXHASH64: XXHasher(),
    Algorithm.SHA256: SHA256Hasher(),
}


def create_hasher(algorithm: Algorithm = Algorithm.XXHASH64) -> Hasher:
    """
    Look up the hasher for an algorithm.

    Raises:
        ValueError: If the algorithm is unknown
    """
    try:
        return _HASHERS[Algorithm(algorithm)]
    except ValueError:
        raise ValueError(f"Unknown algorithm: {algorithm}") from None


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None
) -> str:
    """
    Hash string to hex digest.

    Args:
        text: String to hash
        algorithm: Hash algorithm (default: xxhash64 for speed)
        truncate: Optional length to truncate digest

    Examples:
        >>> len(hash_string("HelloWorld:Hello"))
        16
    """
    digest = create_hasher(algorithm).digest(text.encode("utf-8"))

    if truncate:
        return digest[:truncate]
    return digest


__all__ = [
    "Algorithm",
    "Hasher",
    "create_hasher",
    "hash_string",
]
