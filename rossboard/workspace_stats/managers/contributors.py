"""Contributor leaderboard for a workspace.

The roster is filtered before any stats are crunched.  Two kinds of login
are dropped:

1. Empty logins.  The roster should never contain them, but when it does
   the stats collector would try to aggregate every event with an empty
   actor.
2. Bot accounts (``...[bot]``).  Automation makes an astronomical number of
   commits, comments and reviews; crunching them is expensive and they would
   dominate every ranking.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from operator import attrgetter

from loguru import logger

from rossboard.workspace_stats.collectors.base import MetricCollectors
from rossboard.workspace_stats.models.enums import ContributorStatsOrder, OrderDirection
from rossboard.workspace_stats.models.pagination import (
    ContributorStatsOptions,
    ContributorStatsPage,
    ContributorStatsPageMeta,
)
from rossboard.workspace_stats.models.stats import ContributorStat
from rossboard.workspace_stats.models.workspace import ContributorLogin
from rossboard.workspace_stats.store.base import WorkspaceDirectory

BOT_SUFFIX = "[bot]"


def filter_contributor_logins(roster: Iterable[ContributorLogin]) -> list[str]:
    """Lower-case roster logins, dropping empty ones, bots and duplicates."""
    logins: list[str] = []
    seen: set[str] = set()
    for entry in roster:
        login = (entry.login or "").lower()
        if not login or login.endswith(BOT_SUFFIX) or login in seen:
            continue
        seen.add(login)
        logins.append(login)
    return logins


def order_contributor_stats(
    stats: Iterable[ContributorStat],
    order_by: ContributorStatsOrder,
    direction: OrderDirection,
) -> list[ContributorStat]:
    """Sort by *order_by*; equal keys are ordered by login ascending."""
    ordered = sorted(stats, key=attrgetter("login"))
    ordered.sort(key=attrgetter(order_by.value), reverse=direction == OrderDirection.DESC)
    return ordered


def _page(
    options: ContributorStatsOptions,
    data: Sequence[ContributorStat],
    total_count: int,
    ranked_count: int,
) -> ContributorStatsPage:
    meta = ContributorStatsPageMeta.build(
        options,
        item_count=len(data),
        ranked_count=ranked_count,
        total_count=total_count,
    )
    return ContributorStatsPage(data=list(data), meta=meta)


async def rank_contributors(
    roster: WorkspaceDirectory,
    collectors: MetricCollectors,
    workspace_id: str,
    options: ContributorStatsOptions,
) -> ContributorStatsPage:
    """Rank the workspace's contributors and return the requested page.

    ``meta.total_count`` is the sum of ``total_contributions`` across every
    ranked contributor, independent of which page is returned.
    """
    entries = await roster.find_all_contributors(workspace_id)
    logins = filter_contributor_logins(entries)
    if not logins:
        logger.debug("Workspace {} has no rankable contributors (roster={})", workspace_id, len(entries))
        return _page(options, [], 0, 0)

    stats = await collectors.contributor_stats.find_all_contributor_stats(options, logins)
    ranked = order_contributor_stats(stats, options.order_by, options.order_direction)
    total_count = sum(stat.total_contributions for stat in ranked)

    start = options.offset
    return _page(options, ranked[start : start + options.limit], total_count, len(ranked))
