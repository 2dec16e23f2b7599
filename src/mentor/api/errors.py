"""Error responses for the Mentor Connect API.

Every error is rendered as the same envelope:

    {"status": "fail", "message": "Thread not found"}

``status`` is "fail" for client errors (4xx) and "error" for server
errors (5xx). Domain errors from ``mentor.core.errors`` are mapped here.
"""

from __future__ import annotations

import logging
from enum import Enum

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from mentor.core.errors import (
    CacheUnavailable,
    MentorError,
    NotFoundError,
    StoreFailure,
    UploadFailure,
)

logger = logging.getLogger(__name__)


class ResponseStatus(str, Enum):
    """Status field of the error envelope."""

    FAIL = "fail"
    ERROR = "error"


class ErrorBody(BaseModel):
    """Uniform error envelope."""

    model_config = {"extra": "forbid"}

    status: ResponseStatus
    message: str


def status_for(status_code: int) -> ResponseStatus:
    return ResponseStatus.FAIL if 400 <= status_code < 500 else ResponseStatus.ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorBody(status=status_for(status_code), message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


class ApiError(HTTPException):
    """Base exception for API errors."""

    def __init__(self, status_code: int, message: str):
        self.message = message
        super().__init__(status_code=status_code, detail=message)

    def to_body(self) -> ErrorBody:
        return ErrorBody(status=status_for(self.status_code), message=self.message)


class NotFoundApiError(ApiError):
    """Resource not found (404)."""

    def __init__(self, resource_type: str):
        super().__init__(status_code=404, message=f"{resource_type} not found")


class BadRequestError(ApiError):
    """Invalid request (400)."""

    def __init__(self, message: str):
        super().__init__(status_code=400, message=message)


class InvalidIdentifierError(ApiError):
    """Malformed identifier in a path segment (400)."""

    def __init__(self, identifier: str):
        super().__init__(status_code=400, message=f"Invalid identifier: '{identifier}'")


class InternalServerError(ApiError):
    """Internal server error (500)."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(status_code=500, message=message)


def api_error_from_domain(exc: MentorError) -> ApiError:
    """Translate a domain error into its HTTP counterpart."""
    if isinstance(exc, NotFoundError):
        return NotFoundApiError(exc.resource_type)
    if isinstance(exc, UploadFailure):
        return InternalServerError("Failed to upload image")
    if isinstance(exc, StoreFailure):
        return InternalServerError("Database operation failed")
    if isinstance(exc, CacheUnavailable):
        # Services absorb cache failures; reaching here is a bug
        return InternalServerError()
    return InternalServerError()


async def api_exception_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Exception handler for API errors."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_body().model_dump(mode="json"))


async def domain_exception_handler(request: Request, exc: MentorError) -> JSONResponse:
    """Exception handler for domain errors raised by services."""
    api_error = api_error_from_domain(exc)
    if api_error.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return await api_exception_handler(request, api_error)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the envelope."""
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request body or parameter validation failures are client errors (400)."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return error_response(400, "; ".join(parts) or "Invalid request")


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Exception handler for unexpected errors."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "An unexpected error occurred")
