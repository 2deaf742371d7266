from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRouter
from loguru import logger

from rossboard.workspace_stats.collectors.base import MetricCollectors
from rossboard.workspace_stats.collectors.http import HttpMetricCollectors, create_metrics_client
from rossboard.workspace_stats.db.engine import create_engine, create_session_factory
from rossboard.workspace_stats.log import setup_logging
from rossboard.workspace_stats.settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level, json=settings.log_json)

    logger.info("Workspace stats service starting (host={}, port={})", settings.host, settings.port)

    # -- Initialise state fields (always present, possibly None) ----------------
    _app.state.db_engine = None
    _app.state.db_session_factory = None
    _app.state.metrics_client = None
    _app.state.collectors = None

    # -- Database --------------------------------------------------------------
    if settings.database_url:
        engine = create_engine(settings)
        _app.state.db_engine = engine
        _app.state.db_session_factory = create_session_factory(engine)
        logger.info(
            "PostgreSQL: connected (pool_size={}, max_overflow={})",
            settings.db_pool_size,
            settings.db_max_overflow,
        )
    else:
        logger.warning("ROSS_DATABASE_URL not set -- workspace lookups disabled")

    # -- Metric collectors -----------------------------------------------------
    if settings.metrics_url:
        token = settings.metrics_token.get_secret_value() if settings.metrics_token else None
        client = create_metrics_client(settings.metrics_url, token=token, timeout=settings.metrics_request_timeout)
        _app.state.metrics_client = client
        _app.state.collectors = MetricCollectors.from_single(HttpMetricCollectors(client))
        logger.info(
            "Metrics service: {} (request_timeout={}s, fan-out timeout={})",
            settings.metrics_url,
            settings.metrics_request_timeout,
            settings.collector_timeout,
        )
    else:
        logger.warning("ROSS_METRICS_URL not set -- statistics endpoints disabled")

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("Workspace stats service shutting down")

    if _app.state.metrics_client is not None:
        await _app.state.metrics_client.aclose()
        logger.info("Metrics client: closed")

    # Dispose DB engine (closes all pooled connections).
    if _app.state.db_engine is not None:
        await _app.state.db_engine.dispose()
        logger.info("PostgreSQL: disposed")


app = FastAPI(title="Rossboard Workspace Stats", lifespan=lifespan)

# ---------------------------------------------------------------------------
# API router -- all endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


from rossboard.workspace_stats.routers.workspaces import router as workspaces_router  # noqa: E402

api.include_router(workspaces_router)

app.include_router(api)
