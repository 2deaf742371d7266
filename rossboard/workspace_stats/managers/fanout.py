"""Join barrier for concurrent collector calls.

``collector_task_group`` is an anyio task group whose exit is the barrier:
every task started in it has finished (or been cancelled) when the ``async
with`` block ends.  Any task failure cancels its siblings and surfaces as a
single ``CollectorError``; the optional timeout covers the whole barrier,
not individual calls.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from anyio.abc import TaskGroup
from loguru import logger

from rossboard.workspace_stats.collectors.base import CollectorError, CollectorTimeoutError


def _first_leaf(group: BaseExceptionGroup) -> BaseException:
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc


@asynccontextmanager
async def collector_task_group(timeout: float | None = None, *, label: str = "fan-out") -> AsyncIterator[TaskGroup]:
    try:
        with anyio.fail_after(timeout):
            async with anyio.create_task_group() as tg:
                yield tg
    except TimeoutError as exc:
        logger.warning("{} did not finish within {}s", label, timeout)
        msg = f"{label} timed out after {timeout}s"
        raise CollectorTimeoutError(msg) from exc
    except ExceptionGroup as group:
        cause = _first_leaf(group)
        logger.warning("{} failed ({} error(s)): {!r}", label, len(group.exceptions), cause)
        if isinstance(cause, CollectorError):
            raise CollectorError(str(cause)) from group
        msg = f"{label} failed: {cause!r}"
        raise CollectorError(msg) from group
