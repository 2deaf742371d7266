"""In-memory fakes and fixtures for workspace-stats unit tests.

No database, Docker or network required: ``InMemoryDirectory`` stands in for
the workspace tables and ``FakeCollectors`` for the metrics service.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from datetime import UTC, datetime
from typing import Any

import anyio
import pytest
from httpx import ASGITransport, AsyncClient

from rossboard.workspace_stats.app import app
from rossboard.workspace_stats.collectors.base import CollectorError, MetricCollectors
from rossboard.workspace_stats.deps import get_stats_manager
from rossboard.workspace_stats.managers.workspace_stats import WorkspaceStatsManager
from rossboard.workspace_stats.models.enums import MemberRole
from rossboard.workspace_stats.models.pagination import ContributorStatsOptions
from rossboard.workspace_stats.models.stats import (
    ContributorStat,
    ForkBucket,
    IssueStatsResult,
    PrStatsResult,
    RossContributor,
    StarBucket,
)
from rossboard.workspace_stats.models.workspace import (
    ContributorLogin,
    RepoRef,
    WorkspaceIndex,
    WorkspaceMember,
    WorkspaceRepoLink,
)

DAY_1 = datetime(2026, 10, 1, tzinfo=UTC)
DAY_2 = datetime(2026, 10, 2, tzinfo=UTC)


class InMemoryDirectory:
    """``WorkspaceDirectory`` backed by plain dicts."""

    def __init__(self) -> None:
        self.workspaces: dict[str, WorkspaceIndex] = {}
        self.links: dict[str, list[WorkspaceRepoLink]] = {}
        self.contributors: dict[str, list[ContributorLogin]] = {}
        self._next_repo_id = 1

    def add_workspace(
        self,
        workspace_id: str,
        *,
        is_public: bool = False,
        members: dict[int, MemberRole] | None = None,
    ) -> WorkspaceIndex:
        workspace = WorkspaceIndex(
            workspace_id=workspace_id,
            is_public=is_public,
            members=[WorkspaceMember(user_id=uid, role=role) for uid, role in (members or {}).items()],
        )
        self.workspaces[workspace_id] = workspace
        return workspace

    def add_repo(self, workspace_id: str, full_name: str, *, deleted: bool = False) -> RepoRef:
        repo = RepoRef(repo_id=self._next_repo_id, full_name=full_name)
        self._next_repo_id += 1
        link = WorkspaceRepoLink(workspace_id=workspace_id, repo=repo, deleted_at=DAY_1 if deleted else None)
        self.links.setdefault(workspace_id, []).append(link)
        return repo

    def add_contributors(self, workspace_id: str, *logins: str | None) -> None:
        self.contributors.setdefault(workspace_id, []).extend(ContributorLogin(login=login) for login in logins)

    async def find_workspace(self, workspace_id: str) -> WorkspaceIndex | None:
        return self.workspaces.get(workspace_id)

    async def list_repo_links(self, workspace_id: str) -> list[WorkspaceRepoLink]:
        return list(self.links.get(workspace_id, []))

    async def find_all_contributors(self, workspace_id: str) -> list[ContributorLogin]:
        return list(self.contributors.get(workspace_id, []))


class FakeCollectors:
    """Implements every collector protocol from canned per-repo data.

    Every call is recorded in ``calls``; method names listed in ``fail_on``
    raise ``CollectorError``.  ``latency`` makes every call sleep before it is
    recorded; ``delay`` adds an extra sleep to ``find_pr_stats`` only.  A call
    cancelled while sleeping is never recorded.
    """

    def __init__(self) -> None:
        self.pr_stats: dict[str, PrStatsResult] = {}
        self.issue_stats: dict[str, IssueStatsResult] = {}
        self.activity: dict[str, float] = {}
        self.forks: dict[str, list[ForkBucket]] = {}
        self.stars: dict[str, list[StarBucket]] = {}
        self.ross_index = 0.0
        self.ross_contributors: list[RossContributor] = []
        self.contributor_stats: list[ContributorStat] = []
        self.fail_on: set[str] = set()
        self.delay = 0.0
        self.latency = 0.0
        self.calls: list[tuple[Any, ...]] = []

    async def _record(self, name: str, *args: Any) -> None:
        if self.latency:
            await anyio.sleep(self.latency)
        self.calls.append((name, *args))
        if name in self.fail_on:
            msg = f"{name} unavailable"
            raise CollectorError(msg)

    def called(self, name: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    async def find_pr_stats(self, repo: str, range_days: int, prev_days_start_date: int) -> PrStatsResult:
        if self.delay:
            await anyio.sleep(self.delay)
        await self._record("find_pr_stats", repo, range_days, prev_days_start_date)
        return self.pr_stats.get(repo, PrStatsResult())

    async def find_issue_stats(self, repo: str, range_days: int, prev_days_start_date: int) -> IssueStatsResult:
        await self._record("find_issue_stats", repo, range_days, prev_days_start_date)
        return self.issue_stats.get(repo, IssueStatsResult())

    async def calculate_activity_ratio(self, repo: str, range_days: int) -> float:
        await self._record("calculate_activity_ratio", repo, range_days)
        return self.activity.get(repo, 0.0)

    async def gen_fork_histogram(self, repo: str, range_days: int) -> list[ForkBucket]:
        await self._record("gen_fork_histogram", repo, range_days)
        return self.forks.get(repo, [])

    async def gen_star_histogram(self, repo: str, range_days: int) -> list[StarBucket]:
        await self._record("gen_star_histogram", repo, range_days)
        return self.stars.get(repo, [])

    async def find_ross_index(self, repos: Sequence[str], range_days: int) -> float:
        await self._record("find_ross_index", tuple(repos), range_days)
        return self.ross_index

    async def find_ross_contributors(self, repos: Sequence[str], range_days: int) -> list[RossContributor]:
        await self._record("find_ross_contributors", tuple(repos), range_days)
        return list(self.ross_contributors)

    async def find_all_contributor_stats(
        self,
        options: ContributorStatsOptions,
        logins: Sequence[str],
    ) -> list[ContributorStat]:
        await self._record("find_all_contributor_stats", tuple(logins), options.contributor_type)
        return [stat for stat in self.contributor_stats if stat.login in logins]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def directory() -> InMemoryDirectory:
    return InMemoryDirectory()


@pytest.fixture
def fake() -> FakeCollectors:
    return FakeCollectors()


@pytest.fixture
def collectors(fake: FakeCollectors) -> MetricCollectors:
    return MetricCollectors.from_single(fake)


@pytest.fixture
def manager(directory: InMemoryDirectory, collectors: MetricCollectors) -> WorkspaceStatsManager:
    return WorkspaceStatsManager(directory, collectors)


@pytest.fixture
async def client(manager: WorkspaceStatsManager) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with the in-memory manager.

    Overrides ``get_stats_manager`` so no database or metrics service is
    needed.  The app lifespan does NOT run under ``ASGITransport``.
    """
    app.dependency_overrides[get_stats_manager] = lambda: manager

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
