"""FastAPI application factory for Mentor Connect.

The thread service is built once per process in the lifespan and shared
through ``app.state.thread_service``; tests install their own instance on
``app.state`` and skip the lifespan. Every error leaves as
``{"status": "fail"|"error", "message": ...}``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, cast

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ExceptionHandler

from mentor import __version__
from mentor.api.errors import (
    ApiError,
    api_exception_handler,
    domain_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from mentor.api.middleware import CorrelationMiddleware
from mentor.api.routers import health, students, threads, users
from mentor.cache import close_cache, init_cache
from mentor.config import settings
from mentor.core.errors import MentorError
from mentor.observability import configure_logging
from mentor.persistence.db import close_db, get_session_factory, init_db
from mentor.persistence.store import SqlThreadStore
from mentor.services import ThreadCacheService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the database and cache, wire the thread service, and close both on exit."""
    configure_logging(json_format=settings.env != "dev", level=settings.log_level)
    logger.info("Starting Mentor Connect (%s)", settings.env)
    await init_db()
    cache = await init_cache()

    app.state.thread_service = ThreadCacheService(
        SqlThreadStore(get_session_factory()),
        cache,
        ttl=settings.cache_ttl,
        generation_ttl=settings.cache_generation_ttl,
        cache_timeout=settings.cache_timeout,
        logger=logging.getLogger("mentor.services.thread_cache"),
    )
    logger.info("Mentor Connect startup complete")

    yield

    logger.info("Shutting down Mentor Connect")
    await close_cache()
    await close_db()
    logger.info("Mentor Connect shutdown complete")


EXCEPTION_HANDLERS: list[tuple[type[Exception], Any]] = [
    (ApiError, api_exception_handler),
    (MentorError, domain_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
    (Exception, generic_exception_handler),
]


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, cast(ExceptionHandler, handler))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Mentor Connect",
        description="Mentoring threads and student profiles",
        version=__version__,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.add_middleware(CorrelationMiddleware)
    register_exception_handlers(app)

    for module in (health, threads, users, students):
        app.include_router(module.router)

    return app
