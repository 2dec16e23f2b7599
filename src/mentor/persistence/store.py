"""Thread store: the authoritative source behind the thread read cache.

``ThreadStore`` is the interface the thread service depends on.
``SqlThreadStore`` implements it on top of ``ThreadRepository`` with one
committed transaction per call, and reports every database error as
``StoreFailure``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mentor.core.errors import StoreFailure
from mentor.core.model import Message, Thread, ThreadOverview, ThreadStatus, ThreadSummary
from mentor.persistence.repositories import ThreadRepository

logger = logging.getLogger(__name__)


class ThreadStore(Protocol):
    """Persistence operations for threads and messages."""

    async def get_thread(self, thread_id: str) -> Thread | None: ...

    async def list_threads_for_user(self, user_id: str) -> list[ThreadSummary]: ...

    async def list_threads(self) -> list[ThreadOverview]: ...

    async def create_thread(
        self, author: str, participants: list[str], title: str, topic: str | None
    ) -> ThreadSummary: ...

    async def append_message(
        self, thread_id: str, sender_id: str, body: str
    ) -> tuple[Message, list[str]] | None: ...

    async def set_status(
        self, thread_id: str, status: ThreadStatus
    ) -> tuple[ThreadSummary, list[str]] | None: ...

    async def delete_thread(self, thread_id: str) -> list[str] | None: ...


class SqlThreadStore:
    """``ThreadStore`` backed by PostgreSQL."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _repository(self, operation: str) -> AsyncIterator[ThreadRepository]:
        session = self._session_factory()
        try:
            yield ThreadRepository(session)
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Store operation %s failed: %s", operation, e)
            raise StoreFailure(f"{operation} failed") from e
        finally:
            await session.close()

    async def get_thread(self, thread_id: str) -> Thread | None:
        async with self._repository("get_thread") as repo:
            return await repo.get(thread_id)

    async def list_threads_for_user(self, user_id: str) -> list[ThreadSummary]:
        async with self._repository("list_threads_for_user") as repo:
            return await repo.list_for_user(user_id)

    async def list_threads(self) -> list[ThreadOverview]:
        async with self._repository("list_threads") as repo:
            return await repo.list_all()

    async def create_thread(
        self, author: str, participants: list[str], title: str, topic: str | None
    ) -> ThreadSummary:
        async with self._repository("create_thread") as repo:
            return await repo.create(author, participants, title, topic)

    async def append_message(
        self, thread_id: str, sender_id: str, body: str
    ) -> tuple[Message, list[str]] | None:
        async with self._repository("append_message") as repo:
            return await repo.append_message(thread_id, sender_id, body)

    async def set_status(
        self, thread_id: str, status: ThreadStatus
    ) -> tuple[ThreadSummary, list[str]] | None:
        async with self._repository("set_status") as repo:
            return await repo.set_status(thread_id, status)

    async def delete_thread(self, thread_id: str) -> list[str] | None:
        async with self._repository("delete_thread") as repo:
            return await repo.delete(thread_id)
