"""In-process cache backend.

Suitable for single-instance deployments and tests. Expiry is evaluated
lazily on access against an injectable clock.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence

from mentor.cache.base import CacheBackend
from mentor.cache.keys import CacheKeys

Clock = Callable[[], float]


class InMemoryCache(CacheBackend):
    """Dictionary-backed cache with per-entry expiry."""

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, tuple[bytes, float]] = {}
        self._generations: dict[str, tuple[int, float]] = {}

    def _live_entry(self, key: str) -> bytes | None:
        item = self._entries.get(key)
        if item is None:
            return None
        value, expires_at = item
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def _live_generation(self, key: str) -> int:
        item = self._generations.get(key)
        if item is None:
            return 0
        generation, expires_at = item
        if self._clock() >= expires_at:
            del self._generations[key]
            return 0
        return generation

    async def get_entry(self, key: str) -> tuple[bytes | None, int]:
        return self._live_entry(key), self._live_generation(CacheKeys.generation(key))

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        self._entries[key] = (value, self._clock() + ttl)

    async def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            if self._live_entry(key) is not None:
                deleted += 1
            self._entries.pop(key, None)
        return deleted

    async def bump_generations(self, keys: Sequence[str], ttl: int) -> None:
        expires_at = self._clock() + ttl
        for key in keys:
            gen_key = CacheKeys.generation(key)
            self._generations[gen_key] = (self._live_generation(gen_key) + 1, expires_at)

    async def health_check(self) -> bool:
        return True

    def __contains__(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def __len__(self) -> int:
        return sum(1 for key in list(self._entries) if self._live_entry(key) is not None)
