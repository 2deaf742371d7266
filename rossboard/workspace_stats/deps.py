"""FastAPI dependency injection for DB sessions, collectors and the manager.

Usage in route handlers::

    @router.get("/{workspace_id}/stats")
    async def get_stats(workspace_id: str, manager: StatsManager, user_id: RequestingUserId):
        ...

Dependencies raise HTTP 503 if the backing service was not configured
(ROSS_DATABASE_URL / ROSS_METRICS_URL unset).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from rossboard.workspace_stats.collectors.base import MetricCollectors
from rossboard.workspace_stats.managers.workspace_stats import WorkspaceStatsManager
from rossboard.workspace_stats.settings import get_settings
from rossboard.workspace_stats.store.sql import SqlWorkspaceDirectory


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an async SQLAlchemy session, closing it after the request.

    The service only reads, so nothing is ever committed; closing the
    session returns the connection to the pool.
    """
    session_factory = request.app.state.db_session_factory
    if session_factory is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not configured (ROSS_DATABASE_URL is unset).",
        )
    session: AsyncSession = session_factory()
    try:
        yield session
    finally:
        await session.close()


def get_collectors(request: Request) -> MetricCollectors:
    """Return the shared metric collectors bundle built in the lifespan."""
    collectors: MetricCollectors | None = request.app.state.collectors
    if collectors is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Metrics service not configured (ROSS_METRICS_URL is unset).",
        )
    return collectors


def get_requesting_user_id(x_user_id: Annotated[int | None, Header()] = None) -> int | None:
    """User id forwarded by the authenticating gateway; absent for anonymous callers."""
    return x_user_id


def get_stats_manager(
    db: Annotated[AsyncSession, Depends(get_db)],
    collectors: Annotated[MetricCollectors, Depends(get_collectors)],
) -> WorkspaceStatsManager:
    return WorkspaceStatsManager(
        SqlWorkspaceDirectory(db),
        collectors,
        collector_timeout=get_settings().collector_timeout,
    )


# -- Annotated type aliases for concise route signatures ---------------------

StatsManager = Annotated[WorkspaceStatsManager, Depends(get_stats_manager)]
"""Annotated dependency: per-request ``WorkspaceStatsManager``."""

RequestingUserId = Annotated[int | None, Depends(get_requesting_user_id)]
"""Annotated dependency: the caller's user id, or ``None`` when anonymous."""
