"""Bounded worker pool for visiting discovered files.

A producer task pulls relative paths from an async source and places them on
a queue whose size equals the concurrency bound. A fixed number of worker
tasks take paths off the queue and await the visitor, so at most
``concurrency`` visitor invocations are ever in flight. Submission order is
the order of the source; completion order is not guaranteed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable

from filedrawer.input.interfaces import Visitor
from filedrawer.logging.context import worker_context

logger = logging.getLogger(__name__)

_DONE = object()


async def run_bounded(
    paths: AsyncIterable[str],
    visit: Visitor,
    *,
    concurrency: int | None = None,
    limit: int | None = None,
) -> int:
    """Visit paths from a source with at most ``concurrency`` in flight.

    Once ``limit`` paths have been submitted, the source is not read any
    further; visits already started are allowed to finish. If the source or a
    visit raises, remaining workers are cancelled and the error propagates.

    Args:
        paths: Async iterable of relative paths, in submission order.
        visit: Coroutine called once per path.
        concurrency: Number of workers (None means 1).
        limit: Maximum number of paths to submit, or None for no cap.

    Returns:
        Number of paths submitted to the visitor.
    """
    workers = concurrency or 1
    if workers < 1:
        raise ValueError(f"concurrency must be at least 1, got {workers}")
    if limit is not None and limit <= 0:
        return 0

    queue: asyncio.Queue[object] = asyncio.Queue(maxsize=workers)
    submitted = 0

    async def produce() -> None:
        nonlocal submitted
        try:
            async for path in paths:
                submitted += 1
                await queue.put((submitted, path))
                if limit is not None and submitted >= limit:
                    logger.debug("Limit of %d files reached", limit)
                    break
        finally:
            aclose = getattr(paths, "aclose", None)
            if aclose is not None:
                await aclose()
        for _ in range(workers):
            await queue.put(_DONE)

    async def work(slot: int) -> None:
        worker_id = f"{slot:02d}"
        while True:
            item = await queue.get()
            if item is _DONE:
                return
            number, path = item
            with worker_context(worker_id, f"F{number:04d}", path):
                await visit(path)

    tasks = [asyncio.create_task(produce(), name="filedrawer-producer")]
    tasks.extend(
        asyncio.create_task(work(slot), name=f"filedrawer-worker-{slot:02d}")
        for slot in range(1, workers + 1)
    )
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    return submitted
