"""Cache layer for Mentor Connect.

Provides the thread read cache with the cache-aside pattern:
- Versioned JSON envelopes for populated threads and per-user thread lists
- TTL-based expiration (one hour by default)
- Generation counters so a write always wins over a concurrent repopulate
- Redis and in-memory backends
"""

from mentor.cache.base import CacheBackend
from mentor.cache.codec import CACHE_SCHEMA_VERSION, CacheCodec
from mentor.cache.keys import CacheKeys
from mentor.cache.memory import InMemoryCache
from mentor.cache.redis import RedisCache
from mentor.cache.runtime import close_cache, get_cache, init_cache

__all__ = [
    "CACHE_SCHEMA_VERSION",
    "CacheBackend",
    "CacheCodec",
    "CacheKeys",
    "InMemoryCache",
    "RedisCache",
    "close_cache",
    "get_cache",
    "init_cache",
]
