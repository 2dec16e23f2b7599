"""Thread and message models.

A thread references its messages by id. Three read shapes exist:

- ``Thread``: participants and messages resolved (single-thread view)
- ``ThreadSummary``: participants resolved, messages as id strings
  (per-user list view and write responses)
- ``ThreadOverview``: like ``ThreadSummary`` with the author resolved too
  (the unfiltered listing)
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from mentor.core.ids import canonical_id
from mentor.core.model import StrictModel


class ThreadStatus(str, Enum):
    """Lifecycle state of a thread."""

    OPEN = "open"
    CLOSED = "closed"


class UserSummary(StrictModel):
    """Minimal projection of a user embedded in thread views."""

    id: str
    name: str
    avatar: str | None = None


class Message(StrictModel):
    """A message posted to a thread. Immutable once created."""

    id: str
    sender_id: str = Field(..., alias="senderId")
    body: str
    created_at: datetime = Field(..., alias="createdAt")


class _ThreadBase(StrictModel):
    id: str
    participants: list[UserSummary] = Field(default_factory=list)
    title: str
    topic: str | None = None
    status: ThreadStatus = ThreadStatus.OPEN
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    @property
    def participant_ids(self) -> list[str]:
        return [p.id for p in self.participants]


class Thread(_ThreadBase):
    """Fully populated thread, as served by ``GET /threads/{id}``."""

    author: str
    messages: list[Message] = Field(default_factory=list)


class ThreadSummary(_ThreadBase):
    """Thread with message references left as ids."""

    author: str
    messages: list[str] = Field(default_factory=list)


class ThreadOverview(_ThreadBase):
    """Thread with both author and participants resolved."""

    author: UserSummary | None = None
    messages: list[str] = Field(default_factory=list)


class CreateThreadRequest(StrictModel):
    """Body of ``POST /threads``."""

    author: str
    participants: list[str] = Field(default_factory=list)
    title: str = Field(..., min_length=1)
    topic: str | None = None

    @field_validator("author")
    @classmethod
    def _canonical_author(cls, value: str) -> str:
        return canonical_id(value)

    @field_validator("participants")
    @classmethod
    def _unique_participants(cls, value: list[str]) -> list[str]:
        # Keep first occurrence order
        seen: dict[str, None] = {}
        for raw in value:
            seen.setdefault(canonical_id(raw), None)
        return list(seen)


class SendMessageRequest(StrictModel):
    """Body of ``POST /threads/{id}/messages``."""

    sender_id: str = Field(..., alias="senderId")
    body: str = Field(..., min_length=1)

    @field_validator("sender_id")
    @classmethod
    def _canonical_sender(cls, value: str) -> str:
        return canonical_id(value)
