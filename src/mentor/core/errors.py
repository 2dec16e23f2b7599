"""Domain errors raised by services and their collaborators.

These carry no HTTP semantics. The API layer maps them to status codes
in ``mentor.api.errors``.
"""

from __future__ import annotations


class MentorError(Exception):
    """Base class for domain errors."""


class NotFoundError(MentorError):
    """The requested entity does not exist in the store."""

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found")


class StoreFailure(MentorError):
    """A persistence operation failed. Never retried by the caller."""


class CacheUnavailable(MentorError):
    """A cache operation failed or timed out.

    Always absorbed by the thread service: reads fall back to the store,
    writes still report success.
    """


class UploadFailure(MentorError):
    """The image host rejected or failed an upload."""
