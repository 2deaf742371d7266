"""Metric collector interfaces and implementations."""

from rossboard.workspace_stats.collectors.base import (
    CollectorError,
    CollectorTimeoutError,
    ContributorStatsSource,
    ForkHistogramSource,
    IssueStatsSource,
    MetricCollectors,
    PullRequestStatsSource,
    RepoActivitySource,
    StarHistogramSource,
)
from rossboard.workspace_stats.collectors.http import HttpMetricCollectors

__all__ = [
    "CollectorError",
    "CollectorTimeoutError",
    "ContributorStatsSource",
    "ForkHistogramSource",
    "HttpMetricCollectors",
    "IssueStatsSource",
    "MetricCollectors",
    "PullRequestStatsSource",
    "RepoActivitySource",
    "StarHistogramSource",
]
