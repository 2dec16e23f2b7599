"""Integration test fixtures using Docker.

Provides containerized PostgreSQL and Redis for realistic testing.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from mentor.persistence.tables import Base, RoleTable, UserTable
from tests.factories import new_uuid
from tests.integration.docker_utils import (
    DockerService,
    get_docker_client,
    run_container,
    wait_until,
)


@pytest.fixture(scope="session")
def docker_client():
    """Create a Docker client or skip if Docker is unavailable."""
    try:
        client = get_docker_client()
        client.ping()
    except Exception as exc:
        pytest.skip(f"Docker not available: {exc}")
    yield client
    client.close()


@pytest.fixture(scope="session")
def postgres_container(docker_client) -> Iterator[DockerService]:
    """Start PostgreSQL container for the test session."""
    env = {
        "POSTGRES_USER": "mentor",
        "POSTGRES_PASSWORD": "mentor",
        "POSTGRES_DB": "mentor",
    }
    with run_container(
        docker_client, "postgres:16-alpine", env=env, ports={"5432/tcp": None}
    ) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def redis_container(docker_client) -> Iterator[DockerService]:
    """Start Redis container for the test session."""
    with run_container(docker_client, "redis:7-alpine", ports={"6379/tcp": None}) as redis:
        yield redis


@pytest.fixture(scope="session")
def database_url(postgres_container: DockerService) -> str:
    """Get the database URL for the test container."""
    host = postgres_container.host
    port = postgres_container.port(5432)
    return f"postgresql+asyncpg://mentor:mentor@{host}:{port}/mentor"


@pytest.fixture(scope="session")
def redis_url(redis_container: DockerService) -> str:
    """Get the Redis URL for the test container."""
    return f"redis://{redis_container.host}:{redis_container.port(6379)}/0"


@pytest_asyncio.fixture
async def db_engine(database_url: str) -> AsyncIterator[AsyncEngine]:
    """Create async database engine with a fresh schema."""
    engine = create_async_engine(database_url, echo=False)

    async def probe() -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    await wait_until(probe)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def redis_client(redis_url: str):
    """Create a Redis client for tests."""
    from mentor.cache.redis import create_redis_client

    client = create_redis_client(redis_url, timeout=5.0)
    await wait_until(client.ping)
    yield client
    await client.flushdb()
    await client.aclose()


@pytest_asyncio.fixture
async def seeded_users(
    session_factory: async_sessionmaker[AsyncSession],
) -> dict[str, UserTable]:
    """A student role with two students and one mentor without role."""
    async with session_factory() as session:
        role = RoleTable(id=new_uuid(), name="student")
        session.add(role)
        await session.flush()
        users = {
            "asha": UserTable(
                id=new_uuid(), name="Asha", email="asha@example.edu", role_id=role.id
            ),
            "ravi": UserTable(
                id=new_uuid(),
                name="Ravi",
                email="ravi@example.edu",
                phone="080-1234",
                role_id=role.id,
            ),
            "meera": UserTable(id=new_uuid(), name="Meera", email="meera@example.edu"),
        }
        session.add_all(users.values())
        await session.commit()
    return users
