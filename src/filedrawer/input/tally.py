"""Per-file outcome isolation and counting.

Handler invocations run concurrently, so their outcomes are not counted in
place. Each visit wraps its handler call in a VisitOutcome and reports it to
an OutcomeTally, whose single aggregator task is the only code that touches
the counters.
"""

from __future__ import annotations

import asyncio
import inspect
import traceback
from types import TracebackType
from typing import Any

from filedrawer.input.interfaces import FileHandler, InputLogger
from filedrawer.input.models import OutcomeStatus, VisitOutcome

_DONE = object()


def log_failure(logger: InputLogger, path: str, exc: BaseException) -> None:
    """Log a handler failure with its message and stack when it has one."""
    message = str(exc)
    if message:
        stack = "".join(traceback.format_exception(exc)).rstrip()
        logger.error("Error processing file %s: %s\n%s", path, message, stack)
    else:
        logger.error("Error processing file %s: %s", path, repr(exc))


async def invoke_handler(
    handler: FileHandler,
    logger: InputLogger,
    path: str,
    *args: Any,
) -> VisitOutcome:
    """Call the handler for one file and capture the result.

    Exceptions raised by the handler are logged and turned into a FAILED
    outcome. Cancellation is not caught.

    Args:
        handler: Coroutine function or plain callable.
        logger: Logger for failure lines.
        path: Relative path of the file.
        *args: Extra positional arguments (the extracted date in structured
            mode).

    Returns:
        SUCCEEDED or FAILED outcome for ``path``.
    """
    try:
        result = handler(path, *args)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        log_failure(logger, path, e)
        return VisitOutcome.failed(path, e)
    return VisitOutcome.succeeded(path)


class OutcomeTally:
    """Aggregates visit outcomes for one traversal call.

    Use as an async context manager; outcomes recorded inside the block are
    all counted by the time the block exits.

    Example:
        async with OutcomeTally() as tally:
            await tally.record(VisitOutcome.succeeded("a.txt"))
        assert tally.succeeded == 1
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._task: asyncio.Task[None] | None = None
        self.succeeded = 0
        self.failed = 0
        self.skipped = 0
        self.failures: list[VisitOutcome] = []

    async def __aenter__(self) -> OutcomeTally:
        self._task = asyncio.create_task(self._aggregate(), name="filedrawer-tally")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._task is None:
            return
        self._queue.put_nowait(_DONE)
        await self._task
        self._task = None

    async def record(self, outcome: VisitOutcome) -> None:
        """Report one outcome to the aggregator."""
        if self._task is None:
            raise RuntimeError("OutcomeTally must be entered before recording")
        await self._queue.put(outcome)

    async def _aggregate(self) -> None:
        while True:
            item = await self._queue.get()
            if item is _DONE:
                return
            assert isinstance(item, VisitOutcome)
            if item.status is OutcomeStatus.SUCCEEDED:
                self.succeeded += 1
            elif item.status is OutcomeStatus.FAILED:
                self.failed += 1
                self.failures.append(item)
            else:
                self.skipped += 1
