"""Liveness and readiness probes.

``/health/ready`` probes PostgreSQL and the cache concurrently. The cache
only accelerates reads, so losing it degrades the service; losing the
database makes it unavailable (503).
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from enum import Enum

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel

from mentor.cache.runtime import get_cache
from mentor.persistence import db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

PROBE_TIMEOUT = 5.0

Probe = Callable[[], Awaitable[bool]]


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ComponentHealth(BaseModel):
    name: str
    status: HealthStatus
    latency_ms: float
    message: str | None = None


class ReadinessReport(BaseModel):
    status: HealthStatus
    components: list[ComponentHealth]


async def probe_component(name: str, probe: Probe) -> ComponentHealth:
    """Run one probe under a timeout and time it."""
    started = time.perf_counter()
    message: str | None = None
    try:
        ok = await asyncio.wait_for(probe(), timeout=PROBE_TIMEOUT)
        if not ok:
            message = f"{name} unreachable"
    except asyncio.TimeoutError:
        ok, message = False, f"{name} probe timed out after {PROBE_TIMEOUT:g}s"
    except Exception as e:
        logger.warning("Health probe %s raised: %s", name, e)
        ok, message = False, str(e)

    return ComponentHealth(
        name=name,
        status=HealthStatus.HEALTHY if ok else HealthStatus.UNHEALTHY,
        latency_ms=round((time.perf_counter() - started) * 1000, 2),
        message=message,
    )


async def _cache_probe() -> bool:
    return await get_cache().health_check()


def overall_status(database: ComponentHealth, cache: ComponentHealth) -> HealthStatus:
    if database.status is not HealthStatus.HEALTHY:
        return HealthStatus.UNHEALTHY
    if cache.status is not HealthStatus.HEALTHY:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


@router.get("/live")
async def live() -> dict[str, str]:
    """The process is up."""
    return {"status": "ok"}


@router.get("/ready", response_model=ReadinessReport)
async def ready() -> ORJSONResponse:
    """Database and cache reachability."""
    database, cache = await asyncio.gather(
        probe_component("database", db.health_check),
        probe_component("cache", _cache_probe),
    )
    report = ReadinessReport(status=overall_status(database, cache), components=[database, cache])
    code = 503 if report.status is HealthStatus.UNHEALTHY else 200
    return ORJSONResponse(report.model_dump(mode="json", exclude_none=True), status_code=code)
