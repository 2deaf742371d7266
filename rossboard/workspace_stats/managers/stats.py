"""Workspace statistics aggregation.

For every resolved repo the five per-repo collectors are called
concurrently.  Each task writes a single slot of that repo's private
``_RepoPartial``; nothing shared is mutated while tasks run.  Once the join
barrier has passed, partials are folded in repo order:

- opened / merged / closed / forks / stars are sums;
- PR velocity, issue velocity and activity ratio are summed, then divided
  once by the repo count (skipped entirely when there are no repos);
- ``health`` mirrors ``activity_ratio``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from loguru import logger

from rossboard.workspace_stats.collectors.base import MetricCollectors
from rossboard.workspace_stats.managers.fanout import collector_task_group
from rossboard.workspace_stats.models.stats import (
    IssueStats,
    IssueStatsResult,
    PrStatsResult,
    PullRequestStats,
    RepoStats,
    WorkspaceStats,
)
from rossboard.workspace_stats.models.workspace import RepoRef


@dataclass
class _RepoPartial:
    """Collector results for one repo, filled by that repo's tasks only."""

    full_name: str
    pr_stats: PrStatsResult = field(default_factory=PrStatsResult)
    issue_stats: IssueStatsResult = field(default_factory=IssueStatsResult)
    activity_ratio: float = 0.0
    forks: int = 0
    stars: int = 0


async def _collect_pr_stats(collectors: MetricCollectors, partial: _RepoPartial, range_days: int, prev: int) -> None:
    partial.pr_stats = await collectors.pull_requests.find_pr_stats(partial.full_name, range_days, prev)


async def _collect_issue_stats(collectors: MetricCollectors, partial: _RepoPartial, range_days: int, prev: int) -> None:
    partial.issue_stats = await collectors.issues.find_issue_stats(partial.full_name, range_days, prev)


async def _collect_activity_ratio(collectors: MetricCollectors, partial: _RepoPartial, range_days: int) -> None:
    partial.activity_ratio = await collectors.activity.calculate_activity_ratio(partial.full_name, range_days)


async def _collect_forks(collectors: MetricCollectors, partial: _RepoPartial, range_days: int) -> None:
    buckets = await collectors.forks.gen_fork_histogram(partial.full_name, range_days)
    partial.forks = sum(bucket.forks_count for bucket in buckets)


async def _collect_stars(collectors: MetricCollectors, partial: _RepoPartial, range_days: int) -> None:
    buckets = await collectors.stars.gen_star_histogram(partial.full_name, range_days)
    partial.stars = sum(bucket.star_count for bucket in buckets)


def _fold_partials(partials: Sequence[_RepoPartial]) -> WorkspaceStats:
    """Merge per-repo partials into the workspace aggregate."""
    prs_opened = prs_merged = issues_opened = issues_closed = forks = stars = 0
    pr_velocity = issue_velocity = activity_ratio = 0.0

    for partial in partials:
        prs_opened += partial.pr_stats.open_prs
        prs_merged += partial.pr_stats.accepted_prs
        pr_velocity += partial.pr_stats.pr_velocity
        issues_opened += partial.issue_stats.opened_issues
        issues_closed += partial.issue_stats.closed_issues
        issue_velocity += partial.issue_stats.issue_velocity
        activity_ratio += partial.activity_ratio
        forks += partial.forks
        stars += partial.stars

    count = len(partials)
    if count:
        pr_velocity /= count
        issue_velocity /= count
        activity_ratio /= count

    return WorkspaceStats(
        pull_requests=PullRequestStats(opened=prs_opened, merged=prs_merged, velocity=pr_velocity),
        issues=IssueStats(opened=issues_opened, closed=issues_closed, velocity=issue_velocity),
        # activity ratio is currently the only stat that informs health
        repos=RepoStats(activity_ratio=activity_ratio, forks=forks, stars=stars, health=activity_ratio),
    )


async def aggregate_stats(
    collectors: MetricCollectors,
    repos: Sequence[RepoRef],
    *,
    range_days: int,
    prev_days_start_date: int = 0,
    timeout: float | None = None,
) -> WorkspaceStats:
    """Fan out to the per-repo collectors and merge into ``WorkspaceStats``.

    Raises ``CollectorError`` if any collector call fails or the fan-out
    exceeds *timeout*; no partial aggregate is returned in that case.
    """
    partials = [_RepoPartial(full_name=repo.full_name) for repo in repos]
    if not partials:
        return _fold_partials(partials)

    async with collector_task_group(timeout, label="stats fan-out") as tg:
        for partial in partials:
            tg.start_soon(_collect_pr_stats, collectors, partial, range_days, prev_days_start_date)
            tg.start_soon(_collect_issue_stats, collectors, partial, range_days, prev_days_start_date)
            tg.start_soon(_collect_activity_ratio, collectors, partial, range_days)
            tg.start_soon(_collect_forks, collectors, partial, range_days)
            tg.start_soon(_collect_stars, collectors, partial, range_days)

    logger.debug("Stats fan-out complete: {} repo(s), {} collector call(s)", len(partials), len(partials) * 5)
    return _fold_partials(partials)
