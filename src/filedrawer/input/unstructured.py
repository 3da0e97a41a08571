"""Unstructured input traversal.

Visits every file under a directory (optionally recursively) whose name
matches an extension allow-list, and hands each one to the caller's handler.
"""

from __future__ import annotations

from collections.abc import Sequence

from filedrawer.input.enumerator import FilesystemEnumerator
from filedrawer.input.interfaces import Enumerator, FileHandler, InputLogger
from filedrawer.input.models import TraversalRequest
from filedrawer.input.patterns import build_pattern
from filedrawer.input.tally import OutcomeTally, invoke_handler


async def process(
    root_directory: str,
    recursive: bool,
    extensions: Sequence[str],
    limit: int | None,
    logger: InputLogger,
    handler: FileHandler,
    concurrency: int | None = None,
    *,
    enumerator: Enumerator | None = None,
) -> int:
    """Run the handler on every matching file under a directory.

    Handler failures are logged and do not stop the traversal. Enumeration
    failures (e.g. a missing root) propagate.

    Args:
        root_directory: Directory to traverse.
        recursive: Whether to descend into subdirectories.
        extensions: Bare extensions to accept; empty accepts any file with
            an extension (non-recursive) or any file (recursive).
        limit: Maximum number of files to hand to the handler.
        logger: Six-level logger.
        handler: Called as ``handler(path)`` with the path relative to
            ``root_directory``.
        concurrency: Maximum simultaneous handler invocations.
        enumerator: Filesystem enumerator; defaults to FilesystemEnumerator.

    Returns:
        Number of files whose handler completed without raising.
    """
    enumerator = enumerator or FilesystemEnumerator()
    request = TraversalRequest(
        root_directory=root_directory,
        recursive=recursive,
        extensions=tuple(extensions),
        limit=limit,
        concurrency=concurrency or 1,
    )
    pattern = build_pattern(request.recursive, request.extensions)

    logger.info(
        "Processing unstructured files %s in %s with pattern %s",
        "recursively" if request.recursive else "non-recursively",
        request.root_directory,
        pattern,
    )
    if request.extensions:
        logger.debug("Applying extension filter: %s", ",".join(request.extensions))

    async with OutcomeTally() as tally:

        async def visit(path: str) -> None:
            logger.debug("Processing file %s", path)
            await tally.record(await invoke_handler(handler, logger, path))

        await enumerator.enumerate(
            request.root_directory,
            visit,
            pattern=pattern,
            limit=request.limit,
            concurrency=request.concurrency,
        )

    return tally.succeeded
