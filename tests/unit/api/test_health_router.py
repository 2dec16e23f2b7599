"""Tests for the health probes."""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from mentor.api.app import create_app
from mentor.api.routers import health
from mentor.cache.memory import InMemoryCache
from tests.fakes import BrokenCache


def patch_probes(monkeypatch: pytest.MonkeyPatch, db_ok: bool, cache) -> None:
    async def db_probe() -> bool:
        return db_ok

    monkeypatch.setattr(health.db, "health_check", db_probe)
    monkeypatch.setattr(health, "get_cache", lambda: cache)


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_live(client: TestClient) -> None:
    assert client.get("/health/live").json() == {"status": "ok"}


def test_ready_healthy(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    patch_probes(monkeypatch, db_ok=True, cache=InMemoryCache())

    response = client.get("/health/ready")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert [c["name"] for c in body["components"]] == ["database", "cache"]


def test_ready_degraded_without_cache(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    """Losing the cache keeps the service ready."""
    patch_probes(monkeypatch, db_ok=True, cache=BrokenCache())

    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"


def test_ready_unhealthy_without_database(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    patch_probes(monkeypatch, db_ok=False, cache=InMemoryCache())

    response = client.get("/health/ready")

    assert response.status_code == 503
    database = response.json()["components"][0]
    assert database["status"] == "unhealthy"
    assert database["message"] == "database unreachable"


async def test_probe_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(health, "PROBE_TIMEOUT", 0.01)

    async def stalled() -> bool:
        await asyncio.sleep(1)
        return True

    result = await health.probe_component("cache", stalled)

    assert result.status is health.HealthStatus.UNHEALTHY
    assert "timed out" in (result.message or "")
