"""Workspace data model.

A workspace owns a set of source repositories.  Its membership roster and
visibility decide who may read the aggregated statistics; the rows
themselves are managed elsewhere and are read-only here.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rossboard.workspace_stats.models.enums import MemberRole


class WorkspaceMember(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    role: MemberRole


class WorkspaceIndex(BaseModel):
    """Workspace row (PG) with its membership roster."""

    model_config = ConfigDict(from_attributes=True)

    workspace_id: str
    name: str | None = None
    is_public: bool = False
    payee_user_id: int | None = None
    members: list[WorkspaceMember] = Field(default_factory=list)

    def member_ids(self, *roles: MemberRole) -> set[int]:
        """Return the user ids holding any of *roles* (all roles if none given)."""
        wanted = set(roles) or set(MemberRole)
        return {m.user_id for m in self.members if m.role in wanted}


class RepoRef(BaseModel):
    """A repository identified by its canonical ``org/name``."""

    model_config = ConfigDict(from_attributes=True)

    repo_id: int
    full_name: str


class WorkspaceRepoLink(BaseModel):
    """Join of a workspace to a repo.  ``deleted_at`` set means tombstoned."""

    model_config = ConfigDict(from_attributes=True)

    workspace_id: str
    repo: RepoRef
    deleted_at: datetime | None = None

    @property
    def is_live(self) -> bool:
        return self.deleted_at is None


class ContributorLogin(BaseModel):
    """Roster entry: a contributor identity attached to a workspace."""

    login: str | None = None
