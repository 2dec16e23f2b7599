"""Shared FastAPI dependencies for Mentor Connect routers.

- Identifier validation for path segments
- Service injection (thread service from app state, student service per request)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from mentor.api.errors import InvalidIdentifierError
from mentor.core.ids import InvalidIdentifier, canonical_id
from mentor.persistence.db import get_session
from mentor.services import StudentService, ThreadCacheService
from mentor.storage import ImageUploader, get_image_uploader

# =============================================================================
# Identifier Validation Dependencies
# =============================================================================


def validate_identifier(raw_id: str) -> str:
    """Validate an identifier from the URL path.

    Returns:
        The identifier in canonical form

    Raises:
        InvalidIdentifierError: If the identifier is malformed
    """
    try:
        return canonical_id(raw_id)
    except InvalidIdentifier:
        raise InvalidIdentifierError(raw_id)


def thread_id_path(
    thread_id: Annotated[str, Path(description="Thread identifier")],
) -> str:
    """FastAPI dependency to validate the thread identifier from path."""
    return validate_identifier(thread_id)


def user_id_path(
    user_id: Annotated[str, Path(description="User identifier")],
) -> str:
    """FastAPI dependency to validate the user identifier from path."""
    return validate_identifier(user_id)


ThreadId = Annotated[str, Depends(thread_id_path)]
UserId = Annotated[str, Depends(user_id_path)]

# =============================================================================
# Service Dependencies
# =============================================================================


def get_thread_service(request: Request) -> ThreadCacheService:
    """The process-wide thread service built in the app lifespan."""
    return request.app.state.thread_service


def get_uploader() -> ImageUploader:
    return get_image_uploader()


def get_student_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    uploader: Annotated[ImageUploader, Depends(get_uploader)],
) -> StudentService:
    return StudentService(session, uploader)


ThreadServiceDep = Annotated[ThreadCacheService, Depends(get_thread_service)]
StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
