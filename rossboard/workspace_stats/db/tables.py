"""SQLAlchemy ORM models for PostgreSQL.

These are the single source of truth for the database schema. Alembic reads
``Base.metadata`` to autogenerate migration scripts.  The service only reads
these tables; rows are written by the workspace management service.

Uses SQLAlchemy 2.0 declarative style with ``Mapped`` type annotations.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Timezone-aware timestamp type for all datetime columns.
TimestampTZ = DateTime(timezone=True)


class Base(DeclarativeBase):
    """Declarative base with naming convention for constraints."""

    pass


# Apply naming convention to the metadata for deterministic constraint names.
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Workspace(Base):
    __tablename__ = "workspaces"

    workspace_id: Mapped[str] = mapped_column(primary_key=True)
    name: Mapped[str | None]
    is_public: Mapped[bool] = mapped_column(default=False, server_default="false")
    payee_user_id: Mapped[int | None] = mapped_column(BigInteger)
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now(), onupdate=func.now())

    members: Mapped[list[WorkspaceMember]] = relationship(back_populates="workspace", lazy="raise")


class WorkspaceMember(Base):
    __tablename__ = "workspace_members"
    __table_args__ = (UniqueConstraint("workspace_id", "user_id", name="uq_workspace_members_workspace_user"),)

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    workspace_id: Mapped[str] = mapped_column(
        ForeignKey("workspaces.workspace_id", name="fk_workspace_members_workspace_id", ondelete="CASCADE"),
    )
    user_id: Mapped[int] = mapped_column(BigInteger)
    role: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())

    workspace: Mapped[Workspace] = relationship(back_populates="members")


class Repo(Base):
    __tablename__ = "repos"

    repo_id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    full_name: Mapped[str] = mapped_column(Text, unique=True)


class WorkspaceRepo(Base):
    __tablename__ = "workspace_repos"
    __table_args__ = (Index("ix_workspace_repos_workspace_id", "workspace_id"),)

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    workspace_id: Mapped[str] = mapped_column(
        ForeignKey("workspaces.workspace_id", name="fk_workspace_repos_workspace_id", ondelete="CASCADE"),
    )
    repo_id: Mapped[int] = mapped_column(ForeignKey("repos.repo_id", name="fk_workspace_repos_repo_id"))
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    deleted_at: Mapped[datetime | None] = mapped_column(TimestampTZ)

    repo: Mapped[Repo] = relationship(lazy="raise")


class WorkspaceContributor(Base):
    __tablename__ = "workspace_contributors"
    __table_args__ = (Index("ix_workspace_contributors_workspace_id", "workspace_id"),)

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    workspace_id: Mapped[str] = mapped_column(
        ForeignKey("workspaces.workspace_id", name="fk_workspace_contributors_workspace_id", ondelete="CASCADE"),
    )
    login: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    deleted_at: Mapped[datetime | None] = mapped_column(TimestampTZ)
