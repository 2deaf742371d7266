"""Workspace statistics endpoints (read-only).

Domain exceptions from the manager are translated here:

- ``WorkspaceNotFoundError`` -> 404 with the same body whether the workspace
  is missing or private to other users;
- ``CollectorTimeoutError`` -> 504, any other ``CollectorError`` -> 502;
- invalid options -> 422.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Annotated, TypeVar

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import ValidationError

from rossboard.workspace_stats.collectors.base import CollectorError, CollectorTimeoutError
from rossboard.workspace_stats.deps import RequestingUserId, StatsManager
from rossboard.workspace_stats.managers.access import WorkspaceNotFoundError
from rossboard.workspace_stats.models.enums import ContributorStatsOrder, ContributorType, OrderDirection
from rossboard.workspace_stats.models.pagination import (
    ContributorStatsOptions,
    ContributorStatsPage,
    StatsOptions,
)
from rossboard.workspace_stats.models.stats import WorkspaceRossIndex, WorkspaceStats

router = APIRouter(prefix="/workspaces", tags=["workspace-stats"])

NOT_FOUND_DETAIL = "Workspace not found."

_M = TypeVar("_M")

RangeQuery = Annotated[int, Query(alias="range", description="Look-back window in days: 7, 30 or 90.")]
PrevDaysQuery = Annotated[int, Query(description="Offset in days of the comparison window.")]
ReposQuery = Annotated[str | None, Query(description="Comma delimited repo full names, e.g. 'org/a,org/b'.")]
OrderDirectionQuery = Annotated[str, Query(description="'asc' or 'desc', case-insensitive.")]


def _build_options(factory: Callable[..., _M], **values: object) -> _M:
    """Validate request options, mapping failures to 422."""
    try:
        return factory(**values)
    except ValidationError as exc:
        raise HTTPException(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False),
        ) from None


def _not_found() -> HTTPException:
    return HTTPException(status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_DETAIL)


def _collector_failed(exc: CollectorError) -> HTTPException:
    if isinstance(exc, CollectorTimeoutError):
        return HTTPException(status.HTTP_504_GATEWAY_TIMEOUT, detail="Timed out waiting for workspace metrics.")
    return HTTPException(status.HTTP_502_BAD_GATEWAY, detail="Unable to compute workspace metrics.")


@router.get("/{workspace_id}/stats", response_model=WorkspaceStats)
async def get_workspace_stats(
    workspace_id: str,
    manager: StatsManager,
    user_id: RequestingUserId,
    range_days: RangeQuery = 30,
    prev_days_start_date: PrevDaysQuery = 0,
    repos: ReposQuery = None,
) -> WorkspaceStats:
    """Aggregate PR, issue, fork, star and activity stats across the workspace's repos."""
    options = _build_options(
        StatsOptions,
        range_days=range_days,
        prev_days_start_date=prev_days_start_date,
        repos=repos,
    )
    try:
        return await manager.find_stats(workspace_id, options, user_id)
    except WorkspaceNotFoundError:
        raise _not_found() from None
    except CollectorError as exc:
        raise _collector_failed(exc) from exc


@router.get("/{workspace_id}/stats/ross", response_model=WorkspaceRossIndex)
async def get_workspace_ross(
    workspace_id: str,
    manager: StatsManager,
    user_id: RequestingUserId,
    range_days: RangeQuery = 30,
    repos: ReposQuery = None,
) -> WorkspaceRossIndex:
    """Ross index and contributor attribution for the workspace's repos."""
    options = _build_options(StatsOptions, range_days=range_days, repos=repos)
    try:
        return await manager.find_ross(workspace_id, options, user_id)
    except WorkspaceNotFoundError:
        raise _not_found() from None
    except CollectorError as exc:
        raise _collector_failed(exc) from exc


@router.get("/{workspace_id}/stats/contributors", response_model=ContributorStatsPage)
async def get_workspace_contributor_stats(  # noqa: PLR0913
    workspace_id: str,
    manager: StatsManager,
    user_id: RequestingUserId,
    page: int = 1,
    limit: int = 10,
    skip: int | None = None,
    order_direction: OrderDirectionQuery = OrderDirection.DESC.value,
    order_by: ContributorStatsOrder = ContributorStatsOrder.COMMITS,
    contributor_type: ContributorType = ContributorType.ALL,
    range_days: RangeQuery = 30,
    prev_days_start_date: PrevDaysQuery = 0,
    repos: ReposQuery = None,
) -> ContributorStatsPage:
    """Ranked, paginated contributor leaderboard for the workspace."""
    options = _build_options(
        ContributorStatsOptions,
        page=page,
        limit=limit,
        skip=skip,
        order_direction=order_direction,
        order_by=order_by,
        contributor_type=contributor_type,
        range_days=range_days,
        prev_days_start_date=prev_days_start_date,
        repos=repos,
    )
    try:
        return await manager.find_contributor_stats(workspace_id, options, user_id)
    except WorkspaceNotFoundError:
        raise _not_found() from None
    except CollectorError as exc:
        raise _collector_failed(exc) from exc
