import click

from rossboard.workspace_stats.models.pagination import MAX_PAGE_LIMIT


@click.group()
def main() -> None:
    """Rossboard - workspace-level engineering statistics."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from ROSS_HOST or 0.0.0.0).")
@click.option("--port", default=None, type=int, help="Bind port (default: from ROSS_PORT or 8000).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the workspace stats API server."""
    import uvicorn

    from rossboard.workspace_stats.settings import RossSettings

    settings = RossSettings()

    uvicorn.run(
        "rossboard.workspace_stats.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


@main.command()
@click.argument("workspace_id")
@click.option(
    "--kind",
    type=click.Choice(["stats", "ross", "contributors"]),
    default="stats",
    show_default=True,
    help="Which aggregate to compute.",
)
@click.option("--range", "range_days", type=click.Choice(["7", "30", "90"]), default="30", show_default=True)
@click.option("--repos", default=None, help="Comma delimited repo full names to narrow the workspace to.")
@click.option("--user-id", type=int, default=None, help="Evaluate access as this user (default: anonymous).")
@click.option(
    "--limit",
    type=click.IntRange(1, MAX_PAGE_LIMIT),
    default=10,
    show_default=True,
    help="Contributors per page.",
)
def report(workspace_id: str, kind: str, range_days: str, repos: str | None, user_id: int | None, limit: int) -> None:
    """Print one workspace aggregate as JSON, bypassing the HTTP layer."""
    import asyncio

    from rossboard.workspace_stats.log import setup_logging
    from rossboard.workspace_stats.settings import RossSettings

    settings = RossSettings()
    setup_logging(settings.log_level, json=settings.log_json)
    if not settings.database_url or not settings.metrics_url:
        raise click.UsageError("ROSS_DATABASE_URL and ROSS_METRICS_URL must both be set.")

    result = asyncio.run(_report(settings, workspace_id, kind, int(range_days), repos, user_id, limit))
    click.echo(result)


async def _report(settings, workspace_id, kind, range_days, repos, user_id, limit) -> str:  # noqa: PLR0913
    from rossboard.workspace_stats.collectors.base import CollectorError, MetricCollectors
    from rossboard.workspace_stats.collectors.http import HttpMetricCollectors, create_metrics_client
    from rossboard.workspace_stats.db.engine import create_engine, create_session_factory
    from rossboard.workspace_stats.managers.access import WorkspaceNotFoundError
    from rossboard.workspace_stats.managers.workspace_stats import WorkspaceStatsManager
    from rossboard.workspace_stats.models.pagination import ContributorStatsOptions, StatsOptions
    from rossboard.workspace_stats.store.sql import SqlWorkspaceDirectory

    engine = create_engine(settings, pool_size=1, max_overflow=0)
    token = settings.metrics_token.get_secret_value() if settings.metrics_token else None
    client = create_metrics_client(settings.metrics_url, token=token, timeout=settings.metrics_request_timeout)
    try:
        async with create_session_factory(engine)() as db:
            manager = WorkspaceStatsManager(
                SqlWorkspaceDirectory(db),
                MetricCollectors.from_single(HttpMetricCollectors(client)),
                collector_timeout=settings.collector_timeout,
            )
            if kind == "contributors":
                options = ContributorStatsOptions(range_days=range_days, repos=repos, limit=limit)
                result = await manager.find_contributor_stats(workspace_id, options, user_id)
            elif kind == "ross":
                result = await manager.find_ross(workspace_id, StatsOptions(range_days=range_days, repos=repos), user_id)
            else:
                result = await manager.find_stats(workspace_id, StatsOptions(range_days=range_days, repos=repos), user_id)
    except WorkspaceNotFoundError:
        raise click.ClickException(f"Workspace '{workspace_id}' not found.") from None
    except CollectorError as exc:
        raise click.ClickException(f"Unable to compute {kind}: {exc}") from exc
    finally:
        await client.aclose()
        await engine.dispose()
    return result.model_dump_json(indent=2)


# ---------------------------------------------------------------------------
# Database management
# ---------------------------------------------------------------------------


def _alembic_config():
    """Build an Alembic Config from the package's alembic.ini.

    Both alembic.ini and the alembic/ directory live inside the package,
    so this works whether running from source or from an installed package.
    """
    from pathlib import Path

    from alembic.config import Config

    ini_path = Path(__file__).parent / "workspace_stats" / "alembic.ini"
    return Config(str(ini_path))


@main.group()
def db() -> None:
    """Database migration and management commands."""


@db.command()
@click.option("--revision", default="head", help="Target revision (default: head).")
def upgrade(revision: str) -> None:
    """Run database migrations forward."""
    from alembic import command

    command.upgrade(_alembic_config(), revision)
    click.echo(f"Database upgraded to {revision}.")


@db.command()
@click.option("--revision", default="-1", help="Target revision (default: -1, one step back).")
def downgrade(revision: str) -> None:
    """Roll back database migrations."""
    from alembic import command

    command.downgrade(_alembic_config(), revision)
    click.echo(f"Database downgraded to {revision}.")


@db.command()
@click.argument("message")
def migrate(message: str) -> None:
    """Autogenerate a new migration from model changes."""
    from alembic import command

    command.revision(_alembic_config(), message=message, autogenerate=True)
    click.echo(f"Migration generated: {message}")


@db.command()
def current() -> None:
    """Show current database revision."""
    from alembic import command

    command.current(_alembic_config(), verbose=True)


@db.command()
def history() -> None:
    """Show migration history."""
    from alembic import command

    command.history(_alembic_config(), verbose=True)


if __name__ == "__main__":
    main()
