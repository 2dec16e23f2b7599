"""Tests for cache key generation."""

from mentor.cache.keys import CacheKeys


class TestCacheKeys:
    """Test cache key generation."""

    def test_thread_key(self) -> None:
        """Thread key has correct format."""
        assert CacheKeys.thread("t1") == "thread:t1"

    def test_user_threads_key(self) -> None:
        """User thread list key has correct format."""
        assert CacheKeys.user_threads("u1") == "threads:user:u1"

    def test_generation_key(self) -> None:
        """Generation counter key is suffixed to the entry key."""
        assert CacheKeys.generation("thread:t1") == "thread:t1:gen"
        assert CacheKeys.generation("threads:user:u1") == "threads:user:u1:gen"

    def test_invalidation_keys_thread_and_participants(self) -> None:
        """Thread key comes first, then one list key per participant."""
        keys = CacheKeys.invalidation_keys("t1", ["u1", "u2"])
        assert keys == ["thread:t1", "threads:user:u1", "threads:user:u2"]

    def test_invalidation_keys_deduplicates(self) -> None:
        """Repeated participants produce one key each."""
        keys = CacheKeys.invalidation_keys(None, ["u1", "u2", "u1"])
        assert keys == ["threads:user:u1", "threads:user:u2"]

    def test_invalidation_keys_empty(self) -> None:
        """No thread and no participants yields no keys."""
        assert CacheKeys.invalidation_keys() == []
