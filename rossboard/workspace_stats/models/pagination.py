"""Pagination envelope and request option models.

Options are validated on construction, so an invalid range or page size is
rejected before any collector is invoked.
"""

from __future__ import annotations

import math
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rossboard.workspace_stats.models.enums import ContributorStatsOrder, ContributorType, OrderDirection
from rossboard.workspace_stats.models.stats import ContributorStat

RangeDays = Literal[7, 30, 90]
"""Supported look-back windows, in days."""

MAX_PAGE_LIMIT = 100

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------


class StatsOptions(BaseModel):
    """Range and repo filter shared by the stats and Ross index requests."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    range_days: RangeDays = Field(default=30, alias="range")
    prev_days_start_date: int = Field(default=0, ge=0)
    """Offset (days) of the comparison window used for velocity figures."""

    repos: str | None = Field(default=None, description="Comma delimited repo full names, e.g. 'org/a,org/b'.")


class PageOptions(BaseModel):
    """Page selection: either ``skip`` directly or 1-based ``page`` numbers."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=MAX_PAGE_LIMIT)
    skip: int | None = Field(default=None, ge=0)
    order_direction: OrderDirection = OrderDirection.DESC

    @field_validator("order_direction", mode="before")
    @classmethod
    def _casefold_direction(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value

    @property
    def offset(self) -> int:
        """Index of the first item on the requested page."""
        if self.skip is not None:
            return self.skip
        return (self.page - 1) * self.limit


class ContributorStatsOptions(PageOptions, StatsOptions):
    """Leaderboard request: page selection plus ordering and cohort filters."""

    order_by: ContributorStatsOrder = ContributorStatsOrder.COMMITS
    contributor_type: ContributorType = ContributorType.ALL


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------


class PageMeta(BaseModel):
    page: int
    limit: int
    item_count: int
    page_count: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def build(cls, options: PageOptions, item_count: int, ranked_count: int, **extra: object) -> PageMeta:
        """Derive page figures; *item_count* is this page, *ranked_count* the whole result set."""
        offset = options.offset
        return cls(
            page=offset // options.limit + 1,
            limit=options.limit,
            item_count=item_count,
            page_count=math.ceil(ranked_count / options.limit),
            has_previous_page=offset > 0,
            has_next_page=offset + item_count < ranked_count,
            **extra,
        )


class ContributorStatsPageMeta(PageMeta):
    total_count: int = 0
    """Sum of ``total_contributions`` over every ranked contributor, not just this page."""


class Page(BaseModel, Generic[T]):
    data: list[T] = Field(default_factory=list)
    meta: PageMeta


class ContributorStatsPage(Page[ContributorStat]):
    meta: ContributorStatsPageMeta
