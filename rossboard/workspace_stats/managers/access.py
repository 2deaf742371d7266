"""Workspace read access.

viewers, editors and owners can see what belongs to a private workspace;
public workspaces are readable by everyone, anonymous callers included.
Being the payee of a workspace grants nothing on its own.
"""

from __future__ import annotations

from rossboard.workspace_stats.models.enums import MemberRole
from rossboard.workspace_stats.models.workspace import WorkspaceIndex

READ_ROLES = frozenset({MemberRole.OWNER, MemberRole.EDITOR, MemberRole.VIEWER})


class WorkspaceNotFoundError(LookupError):
    """Raised when a workspace is missing *or* the caller may not read it.

    Both cases deliberately share one exception so callers cannot probe for
    the existence of private workspaces.
    """


def can_view_workspace(workspace: WorkspaceIndex, user_id: int | None) -> bool:
    if workspace.is_public:
        return True
    if user_id is None:
        return False
    return user_id in workspace.member_ids(*READ_ROLES)
