"""Shared enumerations used across the workspace statistics service."""

from __future__ import annotations

from enum import StrEnum

# -- Workspace ---------------------------------------------------------------


class MemberRole(StrEnum):
    """Role of a user within a workspace's membership roster."""

    OWNER = "owner"
    EDITOR = "editor"
    VIEWER = "viewer"


# -- Pagination --------------------------------------------------------------


class OrderDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


# -- Contributors ------------------------------------------------------------


class ContributorStatsOrder(StrEnum):
    """Fields a contributor leaderboard may be ordered by."""

    COMMITS = "commits"
    PRS_CREATED = "prs_created"
    TOTAL_CONTRIBUTIONS = "total_contributions"


class ContributorType(StrEnum):
    """Contributor cohort filter, interpreted by the contributor stats collector."""

    ALL = "all"
    ACTIVE = "active"
    NEW = "new"
    ALUMNI = "alumni"
