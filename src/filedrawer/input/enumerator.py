"""Native filesystem enumerator.

Walks a root directory depth-first with ``os.scandir``, matching relative
POSIX paths against a GlobPattern and feeding matches to the bounded worker
pool. Each directory listing runs in a worker thread so the event loop is
never blocked on filesystem I/O.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import AsyncIterator

from filedrawer.input.interfaces import Enumerator, Visitor
from filedrawer.input.patterns import GlobPattern
from filedrawer.input.pool import run_bounded

logger = logging.getLogger(__name__)


def _list_directory(root: str, relative_dir: str) -> list[tuple[str, bool]]:
    """List one directory, sorted by name.

    Returns:
        (relative path, is directory) pairs. Symlinked directories are
        skipped so the walk cannot loop.
    """
    directory = os.path.join(root, relative_dir) if relative_dir else root
    entries: list[tuple[str, bool]] = []
    with os.scandir(directory) as it:
        for entry in it:
            relative = f"{relative_dir}/{entry.name}" if relative_dir else entry.name
            if entry.is_dir(follow_symlinks=False):
                entries.append((relative, True))
            elif entry.is_file():
                entries.append((relative, False))
    entries.sort()
    return entries


class FilesystemEnumerator(Enumerator):
    """Enumerator over the local filesystem.

    Paths are yielded in lexicographic order within each directory, with
    subdirectories walked as they are reached. Directories the pattern
    cannot match below are never listed.
    """

    async def walk(self, root: str, pattern: GlobPattern) -> AsyncIterator[str]:
        """Yield relative paths of files under ``root`` matching ``pattern``.

        Raises:
            FileNotFoundError: If ``root`` does not exist.
            NotADirectoryError: If ``root`` is not a directory.
            PermissionError: If a directory cannot be listed.
        """
        stack = [iter(await asyncio.to_thread(_list_directory, root, ""))]
        while stack:
            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue
            relative, is_dir = entry
            if is_dir:
                if pattern.could_contain(relative):
                    listing = await asyncio.to_thread(_list_directory, root, relative)
                    stack.append(iter(listing))
            elif pattern.matches(relative):
                yield relative

    async def enumerate(
        self,
        root: str,
        visitor: Visitor,
        *,
        pattern: str,
        limit: int | None = None,
        concurrency: int | None = None,
    ) -> None:
        glob = GlobPattern(pattern)
        logger.debug("Enumerating %s with pattern %s", root, glob.pattern)
        submitted = await run_bounded(
            self.walk(root, glob),
            visitor,
            concurrency=concurrency,
            limit=limit,
        )
        logger.debug("Enumerated %d files under %s", submitted, root)
