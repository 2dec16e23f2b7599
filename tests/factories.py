"""Model factories shared by unit and integration tests."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from mentor.core.model import Message, Thread, ThreadStatus, ThreadSummary, UserSummary

T0 = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)


def new_uuid() -> str:
    return str(uuid4())


def make_user(name: str = "Asha", user_id: str | None = None) -> UserSummary:
    return UserSummary(id=user_id or new_uuid(), name=name, avatar=None)


def make_message(sender_id: str, body: str = "hello") -> Message:
    return Message(id=new_uuid(), sender_id=sender_id, body=body, created_at=T0)


def make_thread(
    participants: list[UserSummary] | None = None,
    messages: list[Message] | None = None,
    status: ThreadStatus = ThreadStatus.OPEN,
    thread_id: str | None = None,
) -> Thread:
    participants = participants if participants is not None else [make_user()]
    return Thread(
        id=thread_id or new_uuid(),
        author=participants[0].id if participants else new_uuid(),
        participants=participants,
        title="Project review",
        topic="capstone",
        status=status,
        messages=messages or [],
        created_at=T0,
        updated_at=T0,
    )


def summarize(thread: Thread) -> ThreadSummary:
    """The per-user list view of a populated thread."""
    return ThreadSummary(
        id=thread.id,
        author=thread.author,
        participants=thread.participants,
        title=thread.title,
        topic=thread.topic,
        status=thread.status,
        messages=[m.id for m in thread.messages],
        created_at=thread.created_at,
        updated_at=thread.updated_at,
    )
