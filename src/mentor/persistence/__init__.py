"""Persistence layer for Mentor Connect.

This module provides:
- Async PostgreSQL engine and session factory
- SQLAlchemy ORM models with JSONB document columns
- Repositories per entity
- The thread store behind the thread read cache
"""

from mentor.persistence.db import close_db, get_engine, get_session, get_session_factory, init_db
from mentor.persistence.repositories import (
    StudentProfileRepository,
    ThreadRepository,
    UserRepository,
)
from mentor.persistence.store import SqlThreadStore, ThreadStore
from mentor.persistence.tables import (
    MessageTable,
    RoleTable,
    StudentProfileTable,
    ThreadTable,
    UserTable,
)

__all__ = [
    # DB
    "close_db",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
    # Tables
    "MessageTable",
    "RoleTable",
    "StudentProfileTable",
    "ThreadTable",
    "UserTable",
    # Repositories
    "StudentProfileRepository",
    "ThreadRepository",
    "UserRepository",
    # Store
    "SqlThreadStore",
    "ThreadStore",
]
