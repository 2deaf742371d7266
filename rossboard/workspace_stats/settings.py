"""Service configuration loaded from ROSS_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RossSettings(BaseSettings):
    """Rossboard workspace statistics settings.

    All fields are read from environment variables with the ``ROSS_`` prefix.
    For example, ``ROSS_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROSS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_json: bool = False
    """Emit one JSON object per log line instead of the coloured console format."""

    # -- Infrastructure --------------------------------------------------------
    database_url: str | None = None
    """PostgreSQL connection string (psycopg).  Required for workspace lookups."""

    db_pool_size: int = 5
    db_max_overflow: int = 10

    # -- Metric collectors -----------------------------------------------------
    metrics_url: str | None = None
    """Base URL of the metrics service that scans raw event data."""

    metrics_token: SecretStr | None = None
    """Bearer token sent to the metrics service, if it requires one."""

    metrics_request_timeout: float = 30.0
    """Per-request timeout (seconds) for a single collector HTTP call."""

    collector_timeout: float | None = None
    """Upper bound (seconds) for one whole fan-out, or ``None`` for no bound.

    Expiry is reported exactly like any other collector failure.
    """

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> RossSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``get_settings.cache_clear()`` in tests to force a
    re-read after overriding env vars.
    """
    return RossSettings()
