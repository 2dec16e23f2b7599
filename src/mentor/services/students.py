"""Student profile service.

Plain CRUD over users and student profiles. The only side effect beyond
the database is pushing inline profile photos to the image host.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mentor.core.errors import NotFoundError, StoreFailure
from mentor.core.model import StudentListItem, StudentProfile, StudentProfileRequest
from mentor.persistence.repositories import StudentProfileRepository, UserRepository
from mentor.storage.base import ImageUploader, is_data_uri_image

logger = logging.getLogger(__name__)

STUDENT_ROLE = "student"
PHOTO_FOLDER = "mentor-connect/students"


class StudentService:
    """Operations behind the ``/students`` endpoints."""

    def __init__(self, session: AsyncSession, uploader: ImageUploader):
        self.session = session
        self.users = UserRepository(session)
        self.profiles = StudentProfileRepository(session)
        self.uploader = uploader

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Store operation %s failed: %s", operation, e)
            raise StoreFailure(str(getattr(e, "orig", None) or e)) from e

    async def save_profile(self, request: StudentProfileRequest) -> StudentProfile:
        """Create or update the profile of ``request.user_id``.

        Only fields present in the request are written. An inline photo is
        uploaded first and replaced by its hosted URL.

        Raises:
            UploadFailure: If the photo upload fails. Nothing is written.
            StoreFailure: If the upsert fails.
        """
        logger.info(
            "Received profile update",
            extra={"student_user_id": request.user_id, "has_photo": bool(request.photo)},
        )
        doc = request.model_dump(
            by_alias=True, exclude={"user_id"}, exclude_unset=True, mode="json"
        )

        photo = request.photo
        if photo is not None and is_data_uri_image(photo) and not self.uploader.is_hosted(photo):
            doc["photo"] = await self.uploader.upload(photo, PHOTO_FOLDER)

        async with self._transaction("save_profile"):
            profile, created = await self.profiles.upsert(request.user_id, doc)
        action = "Created" if created else "Updated"
        logger.info("%s student profile", action, extra={"student_user_id": request.user_id})
        return profile

    async def list_students(self) -> list[StudentListItem]:
        """List all users with the student role.

        Raises:
            NotFoundError: If the student role does not exist.
        """
        async with self._transaction("list_students"):
            role_id = await self.users.get_role_id(STUDENT_ROLE)
            if role_id is None:
                raise NotFoundError("Student role", STUDENT_ROLE)
            return await self.users.list_with_profiles(role_id)

    async def get_profile(self, user_id: str) -> StudentProfile:
        async with self._transaction("get_profile"):
            profile = await self.profiles.get_by_user_id(user_id)
        if profile is None:
            raise NotFoundError("Student profile", user_id)
        return profile

    async def delete_student(self, user_id: str) -> None:
        async with self._transaction("delete_student"):
            deleted = await self.users.delete(user_id)
        if not deleted:
            raise NotFoundError("Student", user_id)
        logger.info("Deleted student %s", user_id)

    async def delete_profile(self, user_id: str) -> None:
        async with self._transaction("delete_profile"):
            deleted = await self.profiles.delete_by_user_id(user_id)
        if not deleted:
            raise NotFoundError("Student profile", user_id)
        logger.info("Deleted student profile of %s", user_id)
