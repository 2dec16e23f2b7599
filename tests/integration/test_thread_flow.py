"""End-to-end thread service tests on PostgreSQL and Redis."""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mentor.cache.keys import CacheKeys
from mentor.cache.redis import RedisCache
from mentor.core.errors import NotFoundError
from mentor.persistence.store import SqlThreadStore
from mentor.persistence.tables import UserTable
from mentor.services import ThreadCacheService
from tests.factories import new_uuid

pytestmark = pytest.mark.integration


@pytest.fixture
def service(
    session_factory: async_sessionmaker[AsyncSession], redis_client
) -> ThreadCacheService:
    return ThreadCacheService(SqlThreadStore(session_factory), RedisCache(redis_client))


class TestThreadFlow:
    """Read-through caching and invalidation against real backends."""

    async def test_cache_aside_round_trip(
        self,
        service: ThreadCacheService,
        redis_client,
        seeded_users: dict[str, UserTable],
    ) -> None:
        """Miss populates Redis with a TTL; the next read is a hit."""
        asha, ravi = seeded_users["asha"], seeded_users["ravi"]
        created = await service.create_thread(asha.id, [asha.id, ravi.id], "Capstone")

        first = await service.get_thread(created.id)
        second = await service.get_thread(created.id)

        assert first.from_cache is False
        assert second.from_cache is True
        assert second.value == first.value
        assert 0 < await redis_client.ttl(CacheKeys.thread(created.id)) <= 3600

    async def test_message_invalidates_thread_and_lists(
        self, service: ThreadCacheService, seeded_users: dict[str, UserTable]
    ) -> None:
        """A sent message is visible in the thread and every participant list."""
        asha, ravi = seeded_users["asha"], seeded_users["ravi"]
        created = await service.create_thread(asha.id, [asha.id, ravi.id], "Capstone")
        await service.get_thread(created.id)
        await service.get_threads_for_user(ravi.id)

        message = await service.send_message(created.id, ravi.id, "hello")

        thread = await service.get_thread(created.id)
        listed = await service.get_threads_for_user(ravi.id)
        assert thread.from_cache is False
        assert thread.value.messages[-1].id == message.id
        assert listed.value[0].messages == [message.id]

    async def test_delete_then_read(
        self, service: ThreadCacheService, seeded_users: dict[str, UserTable]
    ) -> None:
        """Deleted thread is not served from cache."""
        asha = seeded_users["asha"]
        created = await service.create_thread(asha.id, [asha.id], "Capstone")
        await service.get_thread(created.id)

        await service.delete_thread(created.id)
        await service.delete_thread(created.id)

        with pytest.raises(NotFoundError):
            await service.get_thread(created.id)

    async def test_unknown_thread(self, service: ThreadCacheService, redis_client) -> None:
        """Not found leaves no entry behind."""
        thread_id = new_uuid()
        with pytest.raises(NotFoundError):
            await service.get_thread(thread_id)
        assert await redis_client.exists(CacheKeys.thread(thread_id)) == 0
