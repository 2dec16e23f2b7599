"""Redis cache backend.

Provides async Redis operations for the thread read cache.
Uses redis-py async client for connection pooling.
"""

from __future__ import annotations

from collections.abc import Awaitable, Sequence
from typing import TYPE_CHECKING, cast

import redis.asyncio as redis
from redis.exceptions import RedisError

from mentor.cache.base import CacheBackend
from mentor.cache.keys import CacheKeys
from mentor.core.errors import CacheUnavailable

if TYPE_CHECKING:
    from redis.asyncio import Redis


def create_redis_client(url: str, timeout: float) -> Redis:
    """Create a pooled Redis client storing raw bytes."""
    return redis.from_url(  # type: ignore[no-untyped-call]
        url,
        decode_responses=False,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
    )


class RedisCache(CacheBackend):
    """Cache operations for serialized thread views.

    Every Redis failure, timeouts included, surfaces as ``CacheUnavailable``.
    """

    def __init__(self, client: Redis):
        self.client = client

    async def get_entry(self, key: str) -> tuple[bytes | None, int]:
        try:
            async with self.client.pipeline(transaction=False) as pipe:
                pipe.get(key)
                pipe.get(CacheKeys.generation(key))
                value, generation = await pipe.execute()
        except (RedisError, OSError) as e:
            raise CacheUnavailable(f"Redis read failed for {key}: {e}") from e
        return value, int(generation) if generation is not None else 0

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        try:
            await self.client.setex(key, ttl, value)
        except (RedisError, OSError) as e:
            raise CacheUnavailable(f"Redis write failed for {key}: {e}") from e

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        try:
            return cast(int, await self.client.delete(*keys))
        except (RedisError, OSError) as e:
            raise CacheUnavailable(f"Redis delete failed: {e}") from e

    async def bump_generations(self, keys: Sequence[str], ttl: int) -> None:
        if not keys:
            return
        try:
            async with self.client.pipeline(transaction=True) as pipe:
                for key in keys:
                    gen_key = CacheKeys.generation(key)
                    pipe.incr(gen_key)
                    pipe.expire(gen_key, ttl)
                await pipe.execute()
        except (RedisError, OSError) as e:
            raise CacheUnavailable(f"Redis generation bump failed: {e}") from e

    async def health_check(self) -> bool:
        """Check Redis connectivity."""
        try:
            await cast(Awaitable[bool], self.client.ping())
            return True
        except Exception:
            return False

    async def close(self) -> None:
        await self.client.aclose()
