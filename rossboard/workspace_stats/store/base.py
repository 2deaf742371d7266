"""Workspace directory interface.

The directory is the read-only view of workspace records this service
needs: the workspace with its membership roster, its repo links (tombstoned
ones included, so the resolver decides what is live) and its contributor
roster.  Workspace and repository CRUD happen in another service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rossboard.workspace_stats.models.workspace import ContributorLogin, WorkspaceIndex, WorkspaceRepoLink


@runtime_checkable
class WorkspaceDirectory(Protocol):
    async def find_workspace(self, workspace_id: str) -> WorkspaceIndex | None:
        """Return the workspace with its members, or ``None`` if it does not exist."""
        ...

    async def list_repo_links(self, workspace_id: str) -> list[WorkspaceRepoLink]:
        """Return every repo link of the workspace, including tombstoned ones."""
        ...

    async def find_all_contributors(self, workspace_id: str) -> list[ContributorLogin]:
        """Return the workspace's contributor roster (logins only)."""
        ...
