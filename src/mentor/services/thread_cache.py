"""Thread service with a cache-aside read path.

Reads (``get_thread``, ``get_threads_for_user``) check the cache first and
fall back to the store on a miss, populating the cache with a one hour TTL.
Writes mutate the store and then invalidate every cache entry the mutation
could have made stale:

    operation          thread:{id}   threads:user:{pid} for each participant
    create_thread          -                       x
    send_message           x                       x
    open/close_thread      x                       x
    delete_thread          x                       x

Lost invalidation (a slow reader repopulating with pre-write data after the
writer invalidated) is closed with generation counters. A reader reads the
key's generation together with the entry, before going to the store, and
tags what it writes with that generation. A writer bumps the generation
after its store mutation commits. An entry tagged with an outdated
generation is never served.

The cache is best-effort. Any cache failure or timeout is logged and
absorbed; only store failures reach the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from mentor.cache.base import CacheBackend
from mentor.cache.codec import CacheCodec
from mentor.cache.keys import CacheKeys
from mentor.core.errors import CacheUnavailable, NotFoundError
from mentor.core.model import Message, Thread, ThreadOverview, ThreadStatus, ThreadSummary
from mentor.persistence.store import ThreadStore

T = TypeVar("T")

DEFAULT_TTL = 3600
DEFAULT_GENERATION_TTL = 86400
DEFAULT_CACHE_TIMEOUT = 0.5


@dataclass(frozen=True)
class CachedRead(Generic[T]):
    """A read result and whether it was served from the cache."""

    value: T
    from_cache: bool


class ThreadCacheService:
    """Mediates all thread reads and writes."""

    def __init__(
        self,
        store: ThreadStore,
        cache: CacheBackend,
        *,
        codec: CacheCodec | None = None,
        ttl: int = DEFAULT_TTL,
        generation_ttl: int = DEFAULT_GENERATION_TTL,
        cache_timeout: float = DEFAULT_CACHE_TIMEOUT,
        logger: logging.Logger | None = None,
    ):
        self.store = store
        self.cache = cache
        self.codec = codec or CacheCodec()
        self.ttl = ttl
        self.generation_ttl = generation_ttl
        self.cache_timeout = cache_timeout
        self.logger = logger or logging.getLogger(__name__)

    # -------------------------------------------------------------------------
    # Cache primitives (never raise)
    # -------------------------------------------------------------------------

    async def _cache_call(self, operation: str, call: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self.cache_timeout)
        except asyncio.TimeoutError as e:
            raise CacheUnavailable(f"cache {operation} timed out") from e

    async def _lookup(self, key: str) -> tuple[bytes | None, int | None]:
        """Read an entry and its generation.

        Returns (None, None) when the cache is unreachable, which also tells
        the caller not to attempt a populate.
        """
        try:
            return await self._cache_call("get", self.cache.get_entry(key))
        except CacheUnavailable as e:
            self.logger.warning("Cache read failed for %s, falling back to store: %s", key, e)
            return None, None

    async def _populate(self, key: str, value: bytes) -> None:
        try:
            await self._cache_call("set", self.cache.set(key, value, self.ttl))
        except CacheUnavailable as e:
            self.logger.warning("Cache populate failed for %s: %s", key, e)

    async def _invalidate(self, thread_id: str | None, user_ids: Iterable[str] = ()) -> None:
        keys = CacheKeys.invalidation_keys(thread_id, user_ids)
        if not keys:
            return
        failed = False
        # The delete is attempted even when the bump fails
        for operation, call in (
            ("bump", lambda: self.cache.bump_generations(keys, self.generation_ttl)),
            ("delete", lambda: self.cache.delete(*keys)),
        ):
            try:
                await self._cache_call(operation, call())
            except CacheUnavailable as e:
                failed = True
                self.logger.warning(
                    "Cache invalidation failed (%s), entries may be stale until TTL expiry: %s",
                    operation,
                    e,
                    extra={"cache_keys": keys},
                )
        if not failed:
            self.logger.debug("Invalidated %d cache keys", len(keys), extra={"cache_keys": keys})

    # -------------------------------------------------------------------------
    # Read path
    # -------------------------------------------------------------------------

    async def get_thread(self, thread_id: str) -> CachedRead[Thread]:
        """Get a thread with participants and messages resolved.

        Raises:
            NotFoundError: If the thread does not exist. Nothing is cached.
            StoreFailure: If the store read fails.
        """
        key = CacheKeys.thread(thread_id)
        raw, generation = await self._lookup(key)
        if raw is not None and generation is not None:
            cached = self.codec.decode_thread(raw, generation)
            if cached is not None:
                self.logger.debug("Cache hit for %s", key)
                return CachedRead(cached, from_cache=True)

        thread = await self.store.get_thread(thread_id)
        if thread is None:
            raise NotFoundError("Thread", thread_id)

        if generation is not None:
            await self._populate(key, self.codec.encode_thread(thread, generation))
        return CachedRead(thread, from_cache=False)

    async def get_threads_for_user(self, user_id: str) -> CachedRead[list[ThreadSummary]]:
        """List the threads a user participates in, messages left as ids."""
        key = CacheKeys.user_threads(user_id)
        raw, generation = await self._lookup(key)
        if raw is not None and generation is not None:
            cached = self.codec.decode_thread_list(raw, generation)
            if cached is not None:
                self.logger.debug("Cache hit for %s", key)
                return CachedRead(cached, from_cache=True)

        threads = await self.store.list_threads_for_user(user_id)
        self.logger.debug("Fetched %d threads for user %s from store", len(threads), user_id)

        if generation is not None:
            await self._populate(key, self.codec.encode_thread_list(threads, generation))
        return CachedRead(threads, from_cache=False)

    async def list_threads(self) -> list[ThreadOverview]:
        """List every thread. Not cached."""
        return await self.store.list_threads()

    # -------------------------------------------------------------------------
    # Write path
    # -------------------------------------------------------------------------

    async def create_thread(
        self, author: str, participants: list[str], title: str, topic: str | None = None
    ) -> ThreadSummary:
        thread = await self.store.create_thread(author, participants, title, topic)
        self.logger.info("Created thread %s", thread.id)
        await self._invalidate(None, participants)
        return thread

    async def send_message(self, thread_id: str, sender_id: str, body: str) -> Message:
        """Post a message to a thread.

        Raises:
            NotFoundError: If the thread does not exist.
        """
        result = await self.store.append_message(thread_id, sender_id, body)
        if result is None:
            raise NotFoundError("Thread", thread_id)
        message, participants = result
        await self._invalidate(thread_id, participants)
        return message

    async def _set_status(self, thread_id: str, status: ThreadStatus) -> ThreadSummary:
        result = await self.store.set_status(thread_id, status)
        if result is None:
            raise NotFoundError("Thread", thread_id)
        thread, participants = result
        self.logger.info("Thread %s is now %s", thread_id, status.value)
        await self._invalidate(thread_id, participants)
        return thread

    async def open_thread(self, thread_id: str) -> ThreadSummary:
        return await self._set_status(thread_id, ThreadStatus.OPEN)

    async def close_thread(self, thread_id: str) -> ThreadSummary:
        return await self._set_status(thread_id, ThreadStatus.CLOSED)

    async def delete_thread(self, thread_id: str) -> None:
        """Delete a thread. Deleting an absent thread is a no-op."""
        participants = await self.store.delete_thread(thread_id)
        if participants is None:
            self.logger.debug("Thread %s already absent", thread_id)
        else:
            self.logger.info("Deleted thread %s", thread_id)
        await self._invalidate(thread_id, participants or [])
