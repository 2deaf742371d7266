"""Ross index aggregation.

Unlike the stats fan-out, both collectors are keyed by the whole repo set at
once; the score is returned exactly as the collector computed it.
"""

from __future__ import annotations

from collections.abc import Sequence

from rossboard.workspace_stats.collectors.base import MetricCollectors
from rossboard.workspace_stats.managers.fanout import collector_task_group
from rossboard.workspace_stats.models.stats import RossContributor, WorkspaceRossIndex


async def aggregate_ross(
    collectors: MetricCollectors,
    repo_full_names: Sequence[str],
    *,
    range_days: int,
    timeout: float | None = None,
) -> WorkspaceRossIndex:
    if not repo_full_names:
        return WorkspaceRossIndex()

    names = list(repo_full_names)
    score: list[float] = []
    contributors: list[RossContributor] = []

    async def _index() -> None:
        score.append(await collectors.pull_requests.find_ross_index(names, range_days))

    async def _contributors() -> None:
        contributors.extend(await collectors.pull_requests.find_ross_contributors(names, range_days))

    async with collector_task_group(timeout, label="ross fan-out") as tg:
        tg.start_soon(_index)
        tg.start_soon(_contributors)

    return WorkspaceRossIndex(ross=score[0], contributors=contributors)
