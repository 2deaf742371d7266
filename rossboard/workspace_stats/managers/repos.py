"""Resolution of the live repo set a workspace aggregates over."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from rossboard.workspace_stats.models.workspace import RepoRef
    from rossboard.workspace_stats.store.base import WorkspaceDirectory


def sanitize_repos(repos: str) -> list[str]:
    """Split a comma delimited repo filter into lower-cased, unique full names.

    >>> sanitize_repos(" Org/A, org/b ,,ORG/a")
    ['org/a', 'org/b']
    """
    names: list[str] = []
    for part in repos.split(","):
        name = part.strip().lower()
        if name and name not in names:
            names.append(name)
    return names


async def resolve_repos(
    directory: WorkspaceDirectory,
    workspace_id: str,
    repo_filter: str | None = None,
) -> list[RepoRef]:
    """Return the workspace's live repos, optionally narrowed by *repo_filter*.

    Tombstoned links are always excluded.  Filter names are matched
    case-insensitively; names the workspace does not contain are dropped
    silently, so the result may be empty.  Repos are ordered by lower-cased
    full name so aggregates fold in the same order on every request.
    """
    links = await directory.list_repo_links(workspace_id)
    repos = [link.repo for link in links if link.is_live]

    if repo_filter:
        wanted = set(sanitize_repos(repo_filter))
        repos = [repo for repo in repos if repo.full_name.lower() in wanted]

    repos.sort(key=lambda repo: repo.full_name.lower())
    logger.debug(
        "Resolved {} repo(s) for workspace {} (links={}, filter={!r})",
        len(repos),
        workspace_id,
        len(links),
        repo_filter,
    )
    return repos
