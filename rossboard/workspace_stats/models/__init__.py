"""Data models for the workspace statistics service."""

from rossboard.workspace_stats.models.enums import (
    ContributorStatsOrder,
    ContributorType,
    MemberRole,
    OrderDirection,
)
from rossboard.workspace_stats.models.pagination import (
    ContributorStatsOptions,
    ContributorStatsPage,
    ContributorStatsPageMeta,
    Page,
    PageMeta,
    PageOptions,
    StatsOptions,
)
from rossboard.workspace_stats.models.stats import (
    ContributorStat,
    ForkBucket,
    IssueStats,
    IssueStatsResult,
    PrStatsResult,
    PullRequestStats,
    RepoStats,
    RossContributor,
    StarBucket,
    WorkspaceRossIndex,
    WorkspaceStats,
)
from rossboard.workspace_stats.models.workspace import (
    ContributorLogin,
    RepoRef,
    WorkspaceIndex,
    WorkspaceMember,
    WorkspaceRepoLink,
)

__all__ = [
    # Workspace
    "ContributorLogin",
    # Stats
    "ContributorStat",
    # Pagination
    "ContributorStatsOptions",
    # Enums
    "ContributorStatsOrder",
    "ContributorStatsPage",
    "ContributorStatsPageMeta",
    "ContributorType",
    "ForkBucket",
    "IssueStats",
    "IssueStatsResult",
    "MemberRole",
    "OrderDirection",
    "Page",
    "PageMeta",
    "PageOptions",
    "PrStatsResult",
    "PullRequestStats",
    "RepoRef",
    "RepoStats",
    "RossContributor",
    "StarBucket",
    "StatsOptions",
    "WorkspaceIndex",
    "WorkspaceMember",
    "WorkspaceRepoLink",
    "WorkspaceRossIndex",
    "WorkspaceStats",
]
