"""Domain models for Mentor Connect.

All models use Pydantic v2. Wire names are camelCase (``senderId``,
``createdAt``) while Python attributes are snake_case; both spellings are
accepted on input.
"""

from pydantic import BaseModel


class StrictModel(BaseModel):
    """Base model for all domain models.

    Unknown fields are rejected so that cached payloads written by an
    incompatible schema fail validation instead of loading silently.
    """

    model_config = {
        "extra": "forbid",
        "populate_by_name": True,
        "validate_default": True,
    }


# ruff: noqa: E402
from mentor.core.model.student import (
    FullName,
    StudentListItem,
    StudentProfile,
    StudentProfileData,
    StudentProfileRequest,
)
from mentor.core.model.thread import (
    CreateThreadRequest,
    Message,
    SendMessageRequest,
    Thread,
    ThreadOverview,
    ThreadStatus,
    ThreadSummary,
    UserSummary,
)

__all__ = [
    "StrictModel",
    # Threads
    "CreateThreadRequest",
    "Message",
    "SendMessageRequest",
    "Thread",
    "ThreadOverview",
    "ThreadStatus",
    "ThreadSummary",
    "UserSummary",
    # Students
    "FullName",
    "StudentListItem",
    "StudentProfile",
    "StudentProfileData",
    "StudentProfileRequest",
]
