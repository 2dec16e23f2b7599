"""Cache key schema for the thread read cache.

Key families:
- thread:{thread_id}          one populated thread
- threads:user:{user_id}      threads a user participates in
- {key}:gen                   generation counter guarding {key}

Both entry families can go stale from the same write, so writers compute
the full key set through ``invalidation_keys``.
"""

from __future__ import annotations

from collections.abc import Iterable


class CacheKeys:
    """Cache key generator following consistent naming convention."""

    THREAD = "thread"
    USER_THREADS = "threads:user"
    GENERATION_SUFFIX = "gen"

    @classmethod
    def thread(cls, thread_id: str) -> str:
        """Key for a single populated thread."""
        return f"{cls.THREAD}:{thread_id}"

    @classmethod
    def user_threads(cls, user_id: str) -> str:
        """Key for the thread list of one user."""
        return f"{cls.USER_THREADS}:{user_id}"

    @classmethod
    def generation(cls, key: str) -> str:
        """Key for the generation counter of an entry key."""
        return f"{key}:{cls.GENERATION_SUFFIX}"

    @classmethod
    def invalidation_keys(
        cls, thread_id: str | None = None, user_ids: Iterable[str] = ()
    ) -> list[str]:
        """All entry keys a write touching ``thread_id`` and ``user_ids`` can stale.

        Order is stable and duplicates are removed.
        """
        keys: dict[str, None] = {}
        if thread_id is not None:
            keys[cls.thread(thread_id)] = None
        for user_id in user_ids:
            keys[cls.user_threads(user_id)] = None
        return list(keys)
