"""Runtime wiring for the process-wide cache backend.

The backend is created once in the application lifespan with
``init_cache`` and released with ``close_cache``. Services receive it by
injection; nothing else reaches for it globally.
"""

from __future__ import annotations

import logging

from mentor.cache.base import CacheBackend
from mentor.cache.memory import InMemoryCache
from mentor.cache.redis import RedisCache, create_redis_client
from mentor.config import settings

logger = logging.getLogger(__name__)

_cache: CacheBackend | None = None


def create_cache() -> CacheBackend:
    """Create a cache backend based on configuration."""
    backend = settings.cache_backend.lower()

    if backend in {"memory", "inmemory", "in_memory"}:
        return InMemoryCache()

    if backend == "redis":
        return RedisCache(create_redis_client(settings.redis_url, settings.cache_timeout))

    raise ValueError("Unsupported cache_backend. Supported values: memory, redis.")


async def init_cache() -> CacheBackend:
    """Create the process-wide cache backend."""
    global _cache
    if _cache is None:
        _cache = create_cache()
        logger.info("Cache backend initialized (%s)", type(_cache).__name__)
    return _cache


def get_cache() -> CacheBackend:
    """Return the initialized cache backend."""
    if _cache is None:
        raise RuntimeError("Cache backend not initialized; call init_cache() on startup")
    return _cache


async def close_cache() -> None:
    """Close the process-wide cache backend."""
    global _cache
    if _cache is None:
        return
    await _cache.close()
    logger.info("Cache backend closed (%s)", type(_cache).__name__)
    _cache = None
