"""Unit tests for the metrics service HTTP adapter.

Uses ``httpx.MockTransport``; no network required.
"""

from __future__ import annotations

import json

import httpx
import pytest

from rossboard.workspace_stats.collectors.base import (
    CollectorError,
    ContributorStatsSource,
    ForkHistogramSource,
    IssueStatsSource,
    PullRequestStatsSource,
    RepoActivitySource,
    StarHistogramSource,
)
from rossboard.workspace_stats.collectors.http import HttpMetricCollectors
from rossboard.workspace_stats.models.enums import ContributorType
from rossboard.workspace_stats.models.pagination import ContributorStatsOptions


def _collectors(handler) -> HttpMetricCollectors:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://metrics.test")
    return HttpMetricCollectors(client)


def test_implements_every_protocol() -> None:
    collectors = _collectors(lambda request: httpx.Response(200, json={}))
    for protocol in (
        PullRequestStatsSource,
        IssueStatsSource,
        RepoActivitySource,
        ForkHistogramSource,
        StarHistogramSource,
        ContributorStatsSource,
    ):
        assert isinstance(collectors, protocol)


async def test_find_pr_stats_sends_query_params() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"open_prs": 3, "accepted_prs": 2, "pr_velocity": 1.5})

    result = await _collectors(handler).find_pr_stats("org/a", 30, 7)

    assert result.open_prs == 3
    assert result.pr_velocity == 1.5
    assert seen[0].url.path == "/prs/stats"
    assert dict(seen[0].url.params) == {"repo": "org/a", "range": "30", "prev_days_start_date": "7"}


async def test_histograms_parse_buckets() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/histogram/forks":
            return httpx.Response(200, json=[{"bucket": "2026-10-01T00:00:00Z", "forks_count": 4}])
        return httpx.Response(200, json=[{"bucket": "2026-10-01T00:00:00Z", "star_count": 9}])

    collectors = _collectors(handler)

    forks = await collectors.gen_fork_histogram("org/a", 7)
    stars = await collectors.gen_star_histogram("org/a", 7)

    assert [b.forks_count for b in forks] == [4]
    assert [b.star_count for b in stars] == [9]


async def test_scores_accept_bare_number_or_object() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/ross/index":
            return httpx.Response(200, json={"ross": 0.75})
        return httpx.Response(200, json=0.5)

    collectors = _collectors(handler)

    assert await collectors.find_ross_index(["org/a"], 30) == 0.75
    assert await collectors.calculate_activity_ratio("org/a", 30) == 0.5


async def test_contributor_stats_posts_logins_and_type() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json=[{"login": "alice", "commits": 2, "total_contributions": 5}])

    options = ContributorStatsOptions(contributor_type=ContributorType.NEW, range_days=90)
    stats = await _collectors(handler).find_all_contributor_stats(options, ["alice"])

    assert stats[0].login == "alice"
    assert stats[0].total_contributions == 5
    assert bodies[0]["logins"] == ["alice"]
    assert bodies[0]["contributor_type"] == "new"
    assert bodies[0]["range"] == 90


async def test_error_status_raises_collector_error() -> None:
    collectors = _collectors(lambda request: httpx.Response(500, json={"detail": "boom"}))

    with pytest.raises(CollectorError, match="500"):
        await collectors.find_issue_stats("org/a", 30, 0)


async def test_transport_error_raises_collector_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CollectorError, match="failed"):
        await _collectors(handler).find_ross_contributors(["org/a"], 30)


async def test_malformed_payload_raises_collector_error() -> None:
    collectors = _collectors(lambda request: httpx.Response(200, json=[{"forks_count": 1}]))

    with pytest.raises(CollectorError, match="Unexpected payload"):
        await collectors.gen_fork_histogram("org/a", 30)


async def test_invalid_json_raises_collector_error() -> None:
    collectors = _collectors(lambda request: httpx.Response(200, content=b"<html>"))

    with pytest.raises(CollectorError, match="invalid JSON"):
        await collectors.find_pr_stats("org/a", 30, 0)
