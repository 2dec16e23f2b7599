"""Global pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from mentor.core.model import Thread, UserSummary
from tests.factories import make_thread, make_user


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that need Docker-started PostgreSQL and Redis"
    )


@pytest.fixture
def user() -> UserSummary:
    return make_user()


@pytest.fixture
def thread(user: UserSummary) -> Thread:
    return make_thread([user, make_user("Ravi")])
