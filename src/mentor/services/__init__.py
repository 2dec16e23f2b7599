"""Application services for Mentor Connect."""

from mentor.services.students import StudentService
from mentor.services.thread_cache import CachedRead, ThreadCacheService

__all__ = [
    "CachedRead",
    "StudentService",
    "ThreadCacheService",
]
