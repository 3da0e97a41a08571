"""Worker context for structured logging.

The traversal worker pool tags every log record emitted while a file is
being handled with the worker slot and the file's submission number, so
interleaved output from concurrent handlers can be told apart.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass(frozen=True)
class WorkerContext:
    """Identity of the file a worker is currently handling."""

    worker_id: str
    file_id: str | None = None
    file_path: str | None = None

    @property
    def tag(self) -> str:
        """Compact tag for text logs, e.g. "[W01:F0003] "."""
        if self.file_id:
            return f"[W{self.worker_id}:{self.file_id}] "
        return f"[W{self.worker_id}] "


_current: contextvars.ContextVar[WorkerContext | None] = contextvars.ContextVar(
    "filedrawer_worker_context", default=None
)


def get_worker_context() -> WorkerContext | None:
    """Return the context of the current task, if any."""
    return _current.get()


@contextmanager
def worker_context(
    worker_id: str,
    file_id: str | None = None,
    file_path: str | None = None,
) -> Iterator[WorkerContext]:
    """Set the worker context for the duration of a block.

    Context variables are copied per asyncio task, so concurrent workers each
    see their own value.

    Example:
        with worker_context("01", "F0003", "2024/01/15/report.eml"):
            logger.info("Handling file")  # tagged [W01:F0003]
    """
    ctx = WorkerContext(worker_id, file_id, file_path)
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)


class WorkerContextFilter(logging.Filter):
    """Logging filter that injects worker context into log records.

    Adds ``worker_id``, ``file_id``, ``file_path`` and ``worker_tag``
    attributes. ``worker_tag`` is an empty string outside a worker.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _current.get()
        record.worker_id = ctx.worker_id if ctx else None
        record.file_id = ctx.file_id if ctx else None
        record.file_path = ctx.file_path if ctx else None
        record.worker_tag = ctx.tag if ctx else ""
        return True  # Never filter out records
