"""Shared test fixtures: testcontainers for PostgreSQL.

Integration tests use a real PostgreSQL container managed by
testcontainers-python. The container is session-scoped (started once per
test run). Each test function gets an isolated DB session (via savepoint
rollback).

Requires Docker to be available. Tests needing the container are marked
with ``@pytest.mark.integration`` and deselected unless ``-m integration``
is given.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from testcontainers.postgres import PostgresContainer

from rossboard.workspace_stats.settings import get_settings


def _set_env(key: str, value: str) -> None:
    """Set an env var and invalidate the settings cache."""
    os.environ[key] = value
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Session-scoped: container, URL and schema migration
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_container() -> Iterator[PostgresContainer]:
    """Start a PostgreSQL 17 container for the test session."""
    with PostgresContainer(
        image="postgres:17",
        username="test",
        password="test",
        dbname="rossboard_test",
        driver="psycopg",
    ) as pg:
        yield pg


@pytest.fixture(scope="session")
def pg_url(pg_container: PostgresContainer) -> str:
    """PostgreSQL URL (psycopg3 dialect) with Alembic migrations applied."""
    url = pg_container.get_connection_url()
    _set_env("ROSS_DATABASE_URL", url)

    # Apply all migrations using the packaged alembic.ini (same config as CLI).
    from alembic import command
    from alembic.config import Config

    ini_path = Path(__file__).parent.parent / "rossboard" / "workspace_stats" / "alembic.ini"
    command.upgrade(Config(str(ini_path)), "head")

    return url


@pytest.fixture(scope="session")
def async_engine(pg_url: str) -> Iterator[AsyncEngine]:
    """Session-scoped async SQLAlchemy engine."""
    engine = create_async_engine(pg_url)
    yield engine
    engine.sync_engine.dispose()


# ---------------------------------------------------------------------------
# Function-scoped: DB session with savepoint rollback for test isolation
# ---------------------------------------------------------------------------


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Async SQLAlchemy session; all changes rolled back after the test.

    Uses ``join_transaction_mode="create_savepoint"`` so that session.commit()
    inside test setup only commits a savepoint, while the outer transaction
    is rolled back at teardown -- giving each test a clean database state.
    """
    async with async_engine.connect() as conn:
        await conn.begin()
        session = AsyncSession(bind=conn, join_transaction_mode="create_savepoint")
        yield session
        await session.close()
        await conn.rollback()
