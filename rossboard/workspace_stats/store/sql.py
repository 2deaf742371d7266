"""PostgreSQL-backed workspace directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from rossboard.workspace_stats.db.tables import Workspace, WorkspaceContributor, WorkspaceRepo
from rossboard.workspace_stats.models.workspace import (
    ContributorLogin,
    RepoRef,
    WorkspaceIndex,
    WorkspaceRepoLink,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


class SqlWorkspaceDirectory:
    """``WorkspaceDirectory`` over an ``AsyncSession``.

    Bound to one per-request session; rows are converted to pydantic models
    before leaving this class so no lazy loads escape into async code.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_workspace(self, workspace_id: str) -> WorkspaceIndex | None:
        stmt = select(Workspace).where(Workspace.workspace_id == workspace_id).options(selectinload(Workspace.members))
        row = (await self._db.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return WorkspaceIndex.model_validate(row)

    async def list_repo_links(self, workspace_id: str) -> list[WorkspaceRepoLink]:
        stmt = (
            select(WorkspaceRepo)
            .where(WorkspaceRepo.workspace_id == workspace_id)
            .options(selectinload(WorkspaceRepo.repo))
            .order_by(WorkspaceRepo.id)
        )
        rows = (await self._db.execute(stmt)).scalars().all()
        return [
            WorkspaceRepoLink(
                workspace_id=row.workspace_id,
                repo=RepoRef.model_validate(row.repo),
                deleted_at=row.deleted_at,
            )
            for row in rows
        ]

    async def find_all_contributors(self, workspace_id: str) -> list[ContributorLogin]:
        stmt = (
            select(WorkspaceContributor.login)
            .where(WorkspaceContributor.workspace_id == workspace_id)
            .where(WorkspaceContributor.deleted_at.is_(None))
            .order_by(WorkspaceContributor.id)
        )
        logins = (await self._db.execute(stmt)).scalars().all()
        return [ContributorLogin(login=login) for login in logins]
