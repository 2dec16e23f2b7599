"""Cache backend interface.

Backends store opaque bytes with a per-entry TTL and keep an integer
generation counter next to each entry key. Implementations raise
``CacheUnavailable`` for every transport failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence


class CacheBackend(ABC):
    """Abstract key-value cache with TTL and generation counters."""

    @abstractmethod
    async def get_entry(self, key: str) -> tuple[bytes | None, int]:
        """Read an entry together with its current generation.

        Both values are read in one round trip. A missing counter reads as 0.

        Returns:
            Tuple of (value or None, generation).
        """
        ...

    @abstractmethod
    async def set(self, key: str, value: bytes, ttl: int) -> None:
        """Store ``value`` under ``key`` expiring after ``ttl`` seconds."""
        ...

    @abstractmethod
    async def delete(self, *keys: str) -> int:
        """Delete entries. Absent keys are ignored.

        Returns the number of keys that existed.
        """
        ...

    @abstractmethod
    async def bump_generations(self, keys: Sequence[str], ttl: int) -> None:
        """Increment the generation counter of every key in ``keys``.

        Each counter's expiry is reset to ``ttl`` seconds.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check backend connectivity."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        return None
