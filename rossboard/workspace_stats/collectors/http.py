"""HTTP adapter for the metrics service.

The metrics service owns the time-series queries over raw GitHub events.
``HttpMetricCollectors`` implements every collector protocol on top of one
shared ``httpx.AsyncClient`` (created in the app lifespan, so connections are
pooled across requests)::

    GET  /prs/stats            ?repo=&range=&prev_days_start_date=
    GET  /issues/stats         ?repo=&range=&prev_days_start_date=
    GET  /repos/activity-ratio ?repo=&range=
    GET  /histogram/forks      ?repo=&range=
    GET  /histogram/stars      ?repo=&range=
    POST /ross/index           {"repos": [...], "range": N}
    POST /ross/contributors    {"repos": [...], "range": N}
    POST /contributors/stats   {"logins": [...], "contributor_type": ..., ...}

Every failure (transport, non-2xx status, payload that does not validate)
is raised as ``CollectorError``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from rossboard.workspace_stats.collectors.base import CollectorError
from rossboard.workspace_stats.models.stats import (
    ContributorStat,
    ForkBucket,
    IssueStatsResult,
    PrStatsResult,
    RossContributor,
    StarBucket,
)

if TYPE_CHECKING:
    from rossboard.workspace_stats.models.pagination import ContributorStatsOptions

_pr_stats = TypeAdapter(PrStatsResult)
_issue_stats = TypeAdapter(IssueStatsResult)
_fork_buckets = TypeAdapter(list[ForkBucket])
_star_buckets = TypeAdapter(list[StarBucket])
_ross_contributors = TypeAdapter(list[RossContributor])
_contributor_stats = TypeAdapter(list[ContributorStat])
_score = TypeAdapter(float)


def create_metrics_client(
    base_url: str,
    *,
    token: str | None = None,
    timeout: float = 30.0,
) -> httpx.AsyncClient:
    """Create the pooled client used by ``HttpMetricCollectors``."""
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(base_url=base_url, headers=headers, timeout=timeout)


class HttpMetricCollectors:
    """All collector protocols backed by the metrics service HTTP API."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    # -- Transport -------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("Metrics service {} {} -> {}", method, path, exc.response.status_code)
            msg = f"Metrics service returned {exc.response.status_code} for {path}"
            raise CollectorError(msg) from exc
        except httpx.HTTPError as exc:
            logger.warning("Metrics service {} {} failed: {!r}", method, path, exc)
            msg = f"Metrics service request to {path} failed: {exc}"
            raise CollectorError(msg) from exc

        try:
            return response.json()
        except ValueError as exc:
            msg = f"Metrics service returned invalid JSON for {path}"
            raise CollectorError(msg) from exc

    @staticmethod
    def _parse(adapter: TypeAdapter[Any], payload: Any, path: str) -> Any:
        try:
            return adapter.validate_python(payload)
        except ValidationError as exc:
            msg = f"Unexpected payload from metrics service for {path}: {exc.error_count()} error(s)"
            raise CollectorError(msg) from exc

    # -- Per-repo collectors ---------------------------------------------------

    async def find_pr_stats(self, repo: str, range_days: int, prev_days_start_date: int) -> PrStatsResult:
        params = {"repo": repo, "range": range_days, "prev_days_start_date": prev_days_start_date}
        payload = await self._request("GET", "/prs/stats", params=params)
        return self._parse(_pr_stats, payload, "/prs/stats")

    async def find_issue_stats(self, repo: str, range_days: int, prev_days_start_date: int) -> IssueStatsResult:
        params = {"repo": repo, "range": range_days, "prev_days_start_date": prev_days_start_date}
        payload = await self._request("GET", "/issues/stats", params=params)
        return self._parse(_issue_stats, payload, "/issues/stats")

    async def calculate_activity_ratio(self, repo: str, range_days: int) -> float:
        payload = await self._request("GET", "/repos/activity-ratio", params={"repo": repo, "range": range_days})
        if isinstance(payload, dict):
            payload = payload.get("activity_ratio")
        return self._parse(_score, payload, "/repos/activity-ratio")

    async def gen_fork_histogram(self, repo: str, range_days: int) -> list[ForkBucket]:
        payload = await self._request("GET", "/histogram/forks", params={"repo": repo, "range": range_days})
        return self._parse(_fork_buckets, payload, "/histogram/forks")

    async def gen_star_histogram(self, repo: str, range_days: int) -> list[StarBucket]:
        payload = await self._request("GET", "/histogram/stars", params={"repo": repo, "range": range_days})
        return self._parse(_star_buckets, payload, "/histogram/stars")

    # -- Repo-set collectors ---------------------------------------------------

    async def find_ross_index(self, repos: Sequence[str], range_days: int) -> float:
        payload = await self._request("POST", "/ross/index", json={"repos": list(repos), "range": range_days})
        if isinstance(payload, dict):
            payload = payload.get("ross")
        return self._parse(_score, payload, "/ross/index")

    async def find_ross_contributors(self, repos: Sequence[str], range_days: int) -> list[RossContributor]:
        payload = await self._request("POST", "/ross/contributors", json={"repos": list(repos), "range": range_days})
        return self._parse(_ross_contributors, payload, "/ross/contributors")

    async def find_all_contributor_stats(
        self,
        options: ContributorStatsOptions,
        logins: Sequence[str],
    ) -> list[ContributorStat]:
        body = {
            "logins": list(logins),
            "contributor_type": options.contributor_type.value,
            "range": options.range_days,
            "prev_days_start_date": options.prev_days_start_date,
            "repos": options.repos,
        }
        payload = await self._request("POST", "/contributors/stats", json=body)
        return self._parse(_contributor_stats, payload, "/contributors/stats")
