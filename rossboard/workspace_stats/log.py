"""Logging configuration using loguru.

Intercepts stdlib logging so that uvicorn, httpx, sqlalchemy, etc. all
flow through loguru with a unified format.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "sqlalchemy.engine")


class _InterceptHandler(logging.Handler):
    """Bridge stdlib logging records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk past logging's own frames so loguru reports the real call-site
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", *, json: bool = False) -> None:
    """Configure loguru as the sole logging sink.

    With ``json=True`` every record is serialised to a single JSON line on
    stderr, which is what the log shipper in front of the service expects.
    Call this once at process startup (before uvicorn starts).
    """
    level = level.upper()

    logger.remove()
    if json:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_CONSOLE_FORMAT)

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging initialised (level={}, json={})", level, json)
