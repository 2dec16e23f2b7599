"""Users API router.

- GET /users/{user_id}/threads - Threads a user participates in (cache-aside)
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response

from mentor.api.deps import ThreadServiceDep, UserId
from mentor.api.errors import error_response
from mentor.api.responses import success_response
from mentor.core.errors import MentorError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}/threads")
async def get_threads_of_user(user_id: UserId, service: ThreadServiceDep) -> Response:
    """List a user's threads, message ids left unresolved.

    Any failure is a 500 ``Error fetching threads``. The envelope status is
    ``"error"``, not ``"fail"``, following the 5xx rule of every other route.
    """
    try:
        result = await service.get_threads_for_user(user_id)
    except MentorError as e:
        logger.error("Error fetching threads for user %s: %s", user_id, e)
        return error_response(500, "Error fetching threads")
    return success_response({"threads": result.value}, from_cache=result.from_cache)
