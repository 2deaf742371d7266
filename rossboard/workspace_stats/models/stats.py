"""Aggregate statistics models and the collector payloads they are built from.

Collector payload models (``*Result``, ``*Bucket``, ``RossContributor``,
``ContributorStat``) mirror what the metrics service returns for a single
repository or repo set.  The ``Workspace*`` models are the workspace-level
aggregates, constructed fresh for every request.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, NonNegativeInt

# ---------------------------------------------------------------------------
# Collector payloads
# ---------------------------------------------------------------------------


class PrStatsResult(BaseModel):
    open_prs: int = 0
    accepted_prs: int = 0
    pr_velocity: float = 0.0


class IssueStatsResult(BaseModel):
    opened_issues: int = 0
    closed_issues: int = 0
    issue_velocity: float = 0.0


class ForkBucket(BaseModel):
    """One day of fork events."""

    bucket: datetime
    forks_count: int = 0


class StarBucket(BaseModel):
    """One day of star (watch) events."""

    bucket: datetime
    star_count: int = 0


class RossContributor(BaseModel):
    """Contributor attribution for one time bucket of the Ross index."""

    bucket: datetime
    new: int = 0
    recurring: int = 0
    internal: int = 0


class ContributorStat(BaseModel):
    """Per-contributor activity counters over the requested range.

    ``total_contributions`` is the canonical summary figure: rankings and
    page totals use it rather than re-deriving a sum from the other counters.
    """

    login: str
    commits: NonNegativeInt = 0
    prs_created: NonNegativeInt = 0
    prs_reviewed: NonNegativeInt = 0
    issues_created: NonNegativeInt = 0
    commit_comments: NonNegativeInt = 0
    issue_comments: NonNegativeInt = 0
    pr_review_comments: NonNegativeInt = 0
    comments: NonNegativeInt = 0
    total_contributions: NonNegativeInt = 0


# ---------------------------------------------------------------------------
# Workspace aggregates
# ---------------------------------------------------------------------------


class PullRequestStats(BaseModel):
    opened: int = 0
    merged: int = 0
    velocity: float = 0.0


class IssueStats(BaseModel):
    opened: int = 0
    closed: int = 0
    velocity: float = 0.0


class RepoStats(BaseModel):
    activity_ratio: float = 0.0
    forks: int = 0
    stars: int = 0
    health: float = 0.0
    """Alias of ``activity_ratio``; kept as its own field for API stability."""


class WorkspaceStats(BaseModel):
    """Cross-repository statistics for a workspace.

    Counts are sums over the resolved repos; ``velocity`` and
    ``activity_ratio`` are arithmetic means and stay 0 for an empty repo set.
    """

    pull_requests: PullRequestStats = Field(default_factory=PullRequestStats)
    issues: IssueStats = Field(default_factory=IssueStats)
    repos: RepoStats = Field(default_factory=RepoStats)


class WorkspaceRossIndex(BaseModel):
    ross: float = 0.0
    contributors: list[RossContributor] = Field(default_factory=list)
