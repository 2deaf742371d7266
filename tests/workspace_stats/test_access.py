"""Unit tests for workspace read access."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from rossboard.workspace_stats.managers.access import WorkspaceNotFoundError, can_view_workspace
from rossboard.workspace_stats.managers.workspace_stats import WorkspaceStatsManager
from rossboard.workspace_stats.models.enums import MemberRole
from rossboard.workspace_stats.models.pagination import ContributorStatsOptions, StatsOptions
from rossboard.workspace_stats.models.workspace import WorkspaceIndex, WorkspaceMember

if TYPE_CHECKING:
    from conftest import FakeCollectors, InMemoryDirectory


def _private(**members: MemberRole) -> WorkspaceIndex:
    return WorkspaceIndex(
        workspace_id="ws-private",
        is_public=False,
        members=[WorkspaceMember(user_id=int(uid.removeprefix("u")), role=role) for uid, role in members.items()],
    )


def test_public_workspace_viewable_by_anyone() -> None:
    workspace = WorkspaceIndex(workspace_id="ws-public", is_public=True)
    assert can_view_workspace(workspace, None) is True
    assert can_view_workspace(workspace, 42) is True


def test_private_workspace_hidden_from_anonymous() -> None:
    assert can_view_workspace(_private(u1=MemberRole.OWNER), None) is False


@pytest.mark.parametrize("role", list(MemberRole))
def test_private_workspace_viewable_by_every_member_role(role: MemberRole) -> None:
    assert can_view_workspace(_private(u7=role), 7) is True


def test_private_workspace_hidden_from_non_member() -> None:
    workspace = _private(u1=MemberRole.OWNER, u2=MemberRole.VIEWER)
    assert can_view_workspace(workspace, 3) is False


def test_payee_alone_does_not_grant_access() -> None:
    workspace = _private(u1=MemberRole.OWNER).model_copy(update={"payee_user_id": 9})
    assert can_view_workspace(workspace, 9) is False


def test_can_view_is_deterministic() -> None:
    workspace = _private(u1=MemberRole.EDITOR)
    assert {can_view_workspace(workspace, 1) for _ in range(5)} == {True}


async def test_missing_and_forbidden_raise_the_same_error(
    manager: WorkspaceStatsManager,
    directory: InMemoryDirectory,
) -> None:
    directory.add_workspace("ws-secret", members={1: MemberRole.OWNER})

    with pytest.raises(WorkspaceNotFoundError) as missing:
        await manager.get_viewable_workspace("ws-nope", 1)
    with pytest.raises(WorkspaceNotFoundError) as forbidden:
        await manager.get_viewable_workspace("ws-secret", 2)

    assert type(missing.value) is type(forbidden.value)


async def test_denied_request_never_reaches_collectors(
    manager: WorkspaceStatsManager,
    directory: InMemoryDirectory,
    fake: FakeCollectors,
) -> None:
    directory.add_workspace("ws-secret", members={1: MemberRole.OWNER})
    directory.add_repo("ws-secret", "org/a")
    directory.add_contributors("ws-secret", "alice")

    with pytest.raises(WorkspaceNotFoundError):
        await manager.find_stats("ws-secret", StatsOptions(), None)
    with pytest.raises(WorkspaceNotFoundError):
        await manager.find_ross("ws-secret", StatsOptions(), None)
    with pytest.raises(WorkspaceNotFoundError):
        await manager.find_contributor_stats("ws-secret", ContributorStatsOptions(), 99)

    assert fake.calls == []
