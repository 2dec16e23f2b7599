"""Repository pattern for Mentor Connect persistence.

Repositories wrap an ``AsyncSession`` and return domain models. They flush
but never commit; the caller owns the transaction.

Reference resolution mirrors a document store's populate step: ids that
no longer resolve (deleted users or messages) are dropped from the view
while the stored order of the remaining ones is kept.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy import Text, cast, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from mentor.core.ids import new_id
from mentor.core.model import (
    Message,
    StudentListItem,
    StudentProfile,
    Thread,
    ThreadOverview,
    ThreadStatus,
    ThreadSummary,
    UserSummary,
)
from mentor.persistence.tables import (
    MessageTable,
    RoleTable,
    StudentProfileTable,
    ThreadTable,
    UserTable,
    utcnow,
)


class BaseRepository:
    """Base repository holding the session."""

    def __init__(self, session: AsyncSession):
        self.session = session


class UserRepository(BaseRepository):
    """Repository for users and roles."""

    async def get_summaries(self, user_ids: Iterable[str]) -> dict[str, UserSummary]:
        """Resolve user ids to ``{id, name, avatar}`` projections."""
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}
        stmt = select(UserTable.id, UserTable.name, UserTable.avatar).where(UserTable.id.in_(ids))
        result = await self.session.execute(stmt)
        return {
            row.id: UserSummary(id=row.id, name=row.name, avatar=row.avatar)
            for row in result.all()
        }

    async def get_role_id(self, name: str) -> str | None:
        stmt = select(RoleTable.id).where(RoleTable.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_profiles(self, role_id: str) -> list[StudentListItem]:
        """List users of a role joined with their profile contact fields.

        Phone falls back from the user record to the profile's mobile
        number, then to its alternate number.
        """
        stmt = (
            select(UserTable, RoleTable.name.label("role_name"), StudentProfileTable.doc)
            .join(RoleTable, RoleTable.id == UserTable.role_id)
            .outerjoin(StudentProfileTable, StudentProfileTable.user_id == UserTable.id)
            .where(UserTable.role_id == role_id)
            .order_by(UserTable.created_at)
        )
        result = await self.session.execute(stmt)

        items = []
        for user, role_name, doc in result.all():
            profile: dict[str, Any] = doc or {}
            items.append(
                StudentListItem(
                    id=user.id,
                    name=user.name,
                    email=user.email,
                    phone=user.phone
                    or profile.get("mobileNumber")
                    or profile.get("alternatePhoneNumber"),
                    role_name=role_name,
                    department=profile.get("department"),
                    sem=profile.get("sem"),
                    usn=profile.get("usn"),
                )
            )
        return items

    async def delete(self, user_id: str) -> bool:
        """Delete a user.

        Returns:
            True if deleted, False if not found.
        """
        row = await self.session.get(UserTable, user_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        return True


class StudentProfileRepository(BaseRepository):
    """Repository for student profile documents."""

    @staticmethod
    def _to_model(row: StudentProfileTable) -> StudentProfile:
        return StudentProfile.model_validate(
            {
                **row.doc,
                "id": row.id,
                "userId": row.user_id,
                "createdAt": row.created_at,
                "updatedAt": row.updated_at,
            }
        )

    async def _get_row(self, user_id: str) -> StudentProfileTable | None:
        stmt = select(StudentProfileTable).where(StudentProfileTable.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: str) -> StudentProfile | None:
        row = await self._get_row(user_id)
        return self._to_model(row) if row is not None else None

    async def upsert(self, user_id: str, doc: dict[str, Any]) -> tuple[StudentProfile, bool]:
        """Create the profile for ``user_id`` or replace the given fields.

        Returns:
            Tuple of (profile, created).
        """
        row = await self._get_row(user_id)
        created = row is None
        if row is None:
            row = StudentProfileTable(user_id=user_id, doc=doc)
            self.session.add(row)
        else:
            # Reassign so the JSONB column is marked dirty
            row.doc = {**row.doc, **doc}
            row.updated_at = utcnow()
        await self.session.flush()
        return self._to_model(row), created

    async def delete_by_user_id(self, user_id: str) -> bool:
        row = await self._get_row(user_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.flush()
        return True


class ThreadRepository(BaseRepository):
    """Repository for threads and their messages."""

    def __init__(self, session: AsyncSession):
        super().__init__(session)
        self.users = UserRepository(session)

    # -------------------------------------------------------------------------
    # Reference resolution
    # -------------------------------------------------------------------------

    async def _messages(self, message_ids: Sequence[str]) -> list[Message]:
        if not message_ids:
            return []
        stmt = select(MessageTable).where(MessageTable.id.in_(message_ids))
        result = await self.session.execute(stmt)
        by_id = {
            row.id: Message(
                id=row.id, sender_id=row.sender_id, body=row.body, created_at=row.created_at
            )
            for row in result.scalars().all()
        }
        return [by_id[mid] for mid in message_ids if mid in by_id]

    @staticmethod
    def _resolve(ids: Iterable[str], users: dict[str, UserSummary]) -> list[UserSummary]:
        return [users[uid] for uid in ids if uid in users]

    async def _summaries(self, rows: Sequence[ThreadTable]) -> list[ThreadSummary]:
        users = await self.users.get_summaries(uid for row in rows for uid in row.participants)
        return [
            ThreadSummary(
                id=row.id,
                author=row.author_id,
                participants=self._resolve(row.participants, users),
                title=row.title,
                topic=row.topic,
                status=ThreadStatus(row.status),
                messages=list(row.messages),
                created_at=row.created_at,
                updated_at=row.updated_at,
            )
            for row in rows
        ]

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get(self, thread_id: str) -> Thread | None:
        """Get a thread with participants and messages resolved."""
        row = await self.session.get(ThreadTable, thread_id, populate_existing=True)
        if row is None:
            return None
        users = await self.users.get_summaries(row.participants)
        return Thread(
            id=row.id,
            author=row.author_id,
            participants=self._resolve(row.participants, users),
            title=row.title,
            topic=row.topic,
            status=ThreadStatus(row.status),
            messages=await self._messages(row.messages),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def list_for_user(self, user_id: str) -> list[ThreadSummary]:
        """List threads where ``user_id`` is a participant."""
        stmt = (
            select(ThreadTable)
            .where(ThreadTable.participants.contains([user_id]))
            .order_by(ThreadTable.created_at)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return await self._summaries(result.scalars().all())

    async def list_all(self) -> list[ThreadOverview]:
        """List every thread with author and participants resolved."""
        stmt = (
            select(ThreadTable)
            .order_by(ThreadTable.created_at)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        rows = result.scalars().all()
        users = await self.users.get_summaries(
            uid for row in rows for uid in [row.author_id, *row.participants]
        )
        return [
            ThreadOverview(
                id=row.id,
                author=users.get(row.author_id),
                participants=self._resolve(row.participants, users),
                title=row.title,
                topic=row.topic,
                status=ThreadStatus(row.status),
                messages=list(row.messages),
                created_at=row.created_at,
                updated_at=row.updated_at,
            )
            for row in rows
        ]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(
        self, author: str, participants: list[str], title: str, topic: str | None
    ) -> ThreadSummary:
        row = ThreadTable(
            id=new_id(),
            author_id=author,
            participants=participants,
            title=title,
            topic=topic,
            status=ThreadStatus.OPEN.value,
            messages=[],
            created_at=utcnow(),
            updated_at=utcnow(),
        )
        self.session.add(row)
        await self.session.flush()
        (summary,) = await self._summaries([row])
        return summary

    async def append_message(
        self, thread_id: str, sender_id: str, body: str
    ) -> tuple[Message, list[str]] | None:
        """Create a message and push its id onto the thread.

        The push is a single ``jsonb ||`` update, so concurrent appends to
        the same thread never lose each other.

        Returns:
            Tuple of (message, participant ids) or None if the thread is gone.
        """
        message = Message(id=new_id(), sender_id=sender_id, body=body, created_at=utcnow())
        pushed = func.jsonb_build_array(cast(message.id, Text))
        stmt = (
            update(ThreadTable)
            .where(ThreadTable.id == thread_id)
            .values(
                messages=ThreadTable.messages.op("||")(pushed),
                updated_at=message.created_at,
            )
            .returning(ThreadTable.participants)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        participants = result.scalar_one_or_none()
        if participants is None:
            return None

        self.session.add(
            MessageTable(
                id=message.id,
                sender_id=message.sender_id,
                body=message.body,
                created_at=message.created_at,
            )
        )
        await self.session.flush()
        return message, list(participants)

    async def set_status(
        self, thread_id: str, status: ThreadStatus
    ) -> tuple[ThreadSummary, list[str]] | None:
        """Set the thread status.

        Returns:
            Tuple of (summary, stored participant ids) or None if not found.
            The ids include participants whose user record no longer exists.
        """
        row = await self.session.get(ThreadTable, thread_id, populate_existing=True)
        if row is None:
            return None
        row.status = status.value
        row.updated_at = utcnow()
        await self.session.flush()
        (summary,) = await self._summaries([row])
        return summary, list(row.participants)

    async def delete(self, thread_id: str) -> list[str] | None:
        """Delete a thread and its messages.

        Returns:
            The thread's participant ids, or None if not found.
        """
        row = await self.session.get(ThreadTable, thread_id, populate_existing=True)
        if row is None:
            return None
        participants = list(row.participants)
        if row.messages:
            await self.session.execute(
                delete(MessageTable).where(MessageTable.id.in_(list(row.messages)))
            )
        await self.session.delete(row)
        await self.session.flush()
        return participants
