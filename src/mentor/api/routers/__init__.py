"""API routers for Mentor Connect."""

from mentor.api.routers import health, students, threads, users

__all__ = ["health", "students", "threads", "users"]
