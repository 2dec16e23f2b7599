"""Integration tests for the Redis cache backend."""

from __future__ import annotations

import asyncio

import pytest

from mentor.cache.redis import RedisCache, create_redis_client
from mentor.core.errors import CacheUnavailable

pytestmark = pytest.mark.integration


@pytest.fixture
def cache(redis_client) -> RedisCache:
    return RedisCache(redis_client)


class TestRedisCache:
    """Test Redis operations against a real server."""

    async def test_set_and_get_entry(self, cache: RedisCache) -> None:
        """Bytes round-trip unchanged with generation 0."""
        await cache.set("thread:t1", b'{"v":1}', 3600)
        assert await cache.get_entry("thread:t1") == (b'{"v":1}', 0)

    async def test_missing_entry(self, cache: RedisCache) -> None:
        """Absent key returns no value."""
        assert await cache.get_entry("thread:absent") == (None, 0)

    async def test_ttl_applied(self, cache: RedisCache, redis_client) -> None:
        """Entries are written with the requested expiry."""
        await cache.set("thread:t1", b"x", 3600)
        ttl = await redis_client.ttl("thread:t1")
        assert 3590 < ttl <= 3600

    async def test_entry_expires(self, cache: RedisCache) -> None:
        """Entry is gone after its TTL."""
        await cache.set("thread:t1", b"x", 1)
        await asyncio.sleep(1.5)
        assert (await cache.get_entry("thread:t1"))[0] is None

    async def test_delete(self, cache: RedisCache) -> None:
        """Delete counts existing keys and ignores absent ones."""
        await cache.set("thread:t1", b"x", 3600)
        assert await cache.delete("thread:t1", "threads:user:u1") == 1
        assert await cache.delete("thread:t1") == 0
        assert await cache.delete() == 0

    async def test_bump_generations(self, cache: RedisCache, redis_client) -> None:
        """Counters increment and carry their own expiry."""
        await cache.bump_generations(["thread:t1", "threads:user:u1"], 86400)
        await cache.bump_generations(["thread:t1"], 86400)

        assert (await cache.get_entry("thread:t1"))[1] == 2
        assert (await cache.get_entry("threads:user:u1"))[1] == 1
        assert 0 < await redis_client.ttl("thread:t1:gen") <= 86400

    async def test_health_check(self, cache: RedisCache) -> None:
        """Health check succeeds against a live server."""
        assert await cache.health_check() is True


class TestRedisUnavailable:
    """Test failure translation."""

    async def test_unreachable_server_raises_cache_unavailable(self) -> None:
        """Connection errors surface as CacheUnavailable."""
        cache = RedisCache(create_redis_client("redis://127.0.0.1:1/0", timeout=0.2))
        try:
            with pytest.raises(CacheUnavailable):
                await cache.get_entry("thread:t1")
            with pytest.raises(CacheUnavailable):
                await cache.bump_generations(["thread:t1"], 60)
            assert await cache.health_check() is False
        finally:
            await cache.close()
