"""Metric collector interfaces.

Collectors are the external services that scan raw event data and return
per-repository (or per-repo-set) figures.  The aggregation core only depends
on these protocols; ``MetricCollectors`` bundles one implementation per
concern and is injected into the managers.

Implementations raise ``CollectorError`` for any upstream failure.  The
aggregators never retry: one failed call fails the whole request.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rossboard.workspace_stats.models.pagination import ContributorStatsOptions
    from rossboard.workspace_stats.models.stats import (
        ContributorStat,
        ForkBucket,
        IssueStatsResult,
        PrStatsResult,
        RossContributor,
        StarBucket,
    )


class CollectorError(RuntimeError):
    """Raised when an upstream metric source fails or returns unusable data."""


class CollectorTimeoutError(CollectorError):
    """Raised when a fan-out does not complete within the configured bound."""


@runtime_checkable
class PullRequestStatsSource(Protocol):
    async def find_pr_stats(self, repo: str, range_days: int, prev_days_start_date: int) -> PrStatsResult:
        """PR counts and velocity for one repo over the range."""
        ...

    async def find_ross_index(self, repos: Sequence[str], range_days: int) -> float:
        """Composite engagement score for the whole repo set."""
        ...

    async def find_ross_contributors(self, repos: Sequence[str], range_days: int) -> list[RossContributor]:
        """Contributor attribution behind the Ross index, bucketed over time."""
        ...


@runtime_checkable
class IssueStatsSource(Protocol):
    async def find_issue_stats(self, repo: str, range_days: int, prev_days_start_date: int) -> IssueStatsResult: ...


@runtime_checkable
class RepoActivitySource(Protocol):
    async def calculate_activity_ratio(self, repo: str, range_days: int) -> float: ...


@runtime_checkable
class ForkHistogramSource(Protocol):
    async def gen_fork_histogram(self, repo: str, range_days: int) -> list[ForkBucket]:
        """Per-day fork buckets for the range."""
        ...


@runtime_checkable
class StarHistogramSource(Protocol):
    async def gen_star_histogram(self, repo: str, range_days: int) -> list[StarBucket]:
        """Per-day star (watch event) buckets for the range."""
        ...


@runtime_checkable
class ContributorStatsSource(Protocol):
    async def find_all_contributor_stats(
        self,
        options: ContributorStatsOptions,
        logins: Sequence[str],
    ) -> list[ContributorStat]:
        """Stat rows for *logins*; ``options.contributor_type`` is applied upstream."""
        ...


@dataclass(frozen=True)
class MetricCollectors:
    """One collector per concern, injected into the aggregators."""

    pull_requests: PullRequestStatsSource
    issues: IssueStatsSource
    activity: RepoActivitySource
    forks: ForkHistogramSource
    stars: StarHistogramSource
    contributor_stats: ContributorStatsSource

    @classmethod
    def from_single(cls, source: object) -> MetricCollectors:
        """Bundle a single object that implements every collector protocol."""
        return cls(
            pull_requests=source,  # type: ignore[arg-type]
            issues=source,  # type: ignore[arg-type]
            activity=source,  # type: ignore[arg-type]
            forks=source,  # type: ignore[arg-type]
            stars=source,  # type: ignore[arg-type]
            contributor_stats=source,  # type: ignore[arg-type]
        )
