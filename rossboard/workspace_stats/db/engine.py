"""Async SQLAlchemy engine and session factory.

Uses psycopg3 which supports both sync and async with the same
``postgresql+psycopg://`` URL.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from rossboard.workspace_stats.settings import RossSettings


def create_engine(settings: RossSettings, **kwargs: object) -> AsyncEngine:
    """Create an async SQLAlchemy engine for ``settings.database_url``.

    Pool sizing comes from ``ROSS_DB_POOL_SIZE`` / ``ROSS_DB_MAX_OVERFLOW``.
    Connections are pinged before checkout and recycled hourly so that
    server-side disconnects and idle-timeouts on the network path do not
    surface as request errors.  Every default can be overridden via *kwargs*.
    """
    if not settings.database_url:
        msg = "ROSS_DATABASE_URL is not set"
        raise RuntimeError(msg)

    options = {
        "echo": False,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }
    options.update(kwargs)  # type: ignore[arg-type]
    return create_async_engine(settings.database_url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to *engine*.

    ``expire_on_commit=False`` keeps loaded rows usable without implicit IO,
    which async code forbids.
    """
    return async_sessionmaker(engine, expire_on_commit=False)
