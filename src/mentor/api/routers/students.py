"""Students API router.

- POST   /students/profile            - Create or update a student profile
- GET    /students                    - List students with profile contact fields
- GET    /students/{user_id}/profile  - Get a student's profile
- DELETE /students/{user_id}          - Delete a student user
- DELETE /students/{user_id}/profile  - Delete a student's profile
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from mentor.api.deps import StudentServiceDep, UserId
from mentor.api.errors import BadRequestError
from mentor.api.responses import no_content, success_response
from mentor.core.errors import StoreFailure
from mentor.core.model import StudentProfileRequest

router = APIRouter(prefix="/students", tags=["Students"])


@router.post("/profile")
async def save_student_profile(body: StudentProfileRequest, service: StudentServiceDep) -> Response:
    """Create or update the profile of ``userId``.

    An inline ``data:image`` photo is uploaded to the image host and its URL
    stored instead. Store errors are reported as 400 with their message.
    """
    try:
        profile = await service.save_profile(body)
    except StoreFailure as e:
        raise BadRequestError(str(e))
    return success_response({"studentProfile": profile})


@router.get("")
async def get_all_students(service: StudentServiceDep) -> Response:
    students = await service.list_students()
    return success_response(students)


@router.get("/{user_id}/profile")
async def get_student_profile(user_id: UserId, service: StudentServiceDep) -> Response:
    profile = await service.get_profile(user_id)
    return success_response({"studentProfile": profile})


@router.delete("/{user_id}", status_code=204)
async def delete_student(user_id: UserId, service: StudentServiceDep) -> Response:
    await service.delete_student(user_id)
    return no_content()


@router.delete("/{user_id}/profile", status_code=204)
async def delete_student_profile(user_id: UserId, service: StudentServiceDep) -> Response:
    await service.delete_profile(user_id)
    return no_content()
