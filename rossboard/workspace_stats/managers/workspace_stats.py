"""Workspace statistics manager -- the request-facing entry point.

Every operation runs the same pipeline::

    find workspace -> access check -> resolve repos -> aggregate

The access check happens before any collector is touched, and a missing
workspace is indistinguishable from one the caller may not read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from rossboard.workspace_stats.managers.access import WorkspaceNotFoundError, can_view_workspace
from rossboard.workspace_stats.managers.contributors import rank_contributors
from rossboard.workspace_stats.managers.repos import resolve_repos
from rossboard.workspace_stats.managers.ross import aggregate_ross
from rossboard.workspace_stats.managers.stats import aggregate_stats

if TYPE_CHECKING:
    from rossboard.workspace_stats.collectors.base import MetricCollectors
    from rossboard.workspace_stats.models.pagination import (
        ContributorStatsOptions,
        ContributorStatsPage,
        StatsOptions,
    )
    from rossboard.workspace_stats.models.stats import WorkspaceRossIndex, WorkspaceStats
    from rossboard.workspace_stats.models.workspace import WorkspaceIndex
    from rossboard.workspace_stats.store.base import WorkspaceDirectory


class WorkspaceStatsManager:
    """Serves the three read operations for one request.

    Stateless beyond its references to the workspace directory and the
    metric collectors; build a new one per request (the directory is usually
    bound to a per-request DB session).
    """

    def __init__(
        self,
        directory: WorkspaceDirectory,
        collectors: MetricCollectors,
        *,
        collector_timeout: float | None = None,
    ) -> None:
        self._directory = directory
        self._collectors = collectors
        self._collector_timeout = collector_timeout

    async def get_viewable_workspace(self, workspace_id: str, user_id: int | None) -> WorkspaceIndex:
        """Return the workspace if *user_id* may read it.

        Raises ``WorkspaceNotFoundError`` when it is missing or not readable.
        """
        workspace = await self._directory.find_workspace(workspace_id)
        if workspace is None or not can_view_workspace(workspace, user_id):
            logger.debug("Workspace {} not viewable (user={})", workspace_id, user_id)
            raise WorkspaceNotFoundError(workspace_id)
        return workspace

    # -- Operations ------------------------------------------------------------

    async def find_stats(
        self,
        workspace_id: str,
        options: StatsOptions,
        user_id: int | None = None,
    ) -> WorkspaceStats:
        await self.get_viewable_workspace(workspace_id, user_id)
        repos = await resolve_repos(self._directory, workspace_id, options.repos)

        stats = await aggregate_stats(
            self._collectors,
            repos,
            range_days=options.range_days,
            prev_days_start_date=options.prev_days_start_date,
            timeout=self._collector_timeout,
        )
        logger.info(
            "Workspace stats computed: {} (repos={}, range={})",
            workspace_id,
            len(repos),
            options.range_days,
        )
        return stats

    async def find_ross(
        self,
        workspace_id: str,
        options: StatsOptions,
        user_id: int | None = None,
    ) -> WorkspaceRossIndex:
        await self.get_viewable_workspace(workspace_id, user_id)
        repos = await resolve_repos(self._directory, workspace_id, options.repos)

        ross = await aggregate_ross(
            self._collectors,
            [repo.full_name for repo in repos],
            range_days=options.range_days,
            timeout=self._collector_timeout,
        )
        logger.info("Workspace Ross index computed: {} (repos={}, ross={})", workspace_id, len(repos), ross.ross)
        return ross

    async def find_contributor_stats(
        self,
        workspace_id: str,
        options: ContributorStatsOptions,
        user_id: int | None = None,
    ) -> ContributorStatsPage:
        await self.get_viewable_workspace(workspace_id, user_id)

        page = await rank_contributors(self._directory, self._collectors, workspace_id, options)
        logger.info(
            "Workspace contributors ranked: {} (items={}, total_contributions={})",
            workspace_id,
            page.meta.item_count,
            page.meta.total_count,
        )
        return page
