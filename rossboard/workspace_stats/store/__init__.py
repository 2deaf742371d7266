"""Read-only access to workspace records."""

from rossboard.workspace_stats.store.base import WorkspaceDirectory
from rossboard.workspace_stats.store.sql import SqlWorkspaceDirectory

__all__ = ["SqlWorkspaceDirectory", "WorkspaceDirectory"]
