"""Abstract contracts consumed by the input scanners.

The scanners never walk the filesystem or format log output themselves.
They depend on three injected capabilities:

- Enumerator: discovers files matching a glob and visits each one under a
  concurrency bound.
- FileHandler: the caller's per-file strategy object.
- InputLogger: a six-level, printf-style logger.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

Visitor = Callable[[str], Awaitable[None]]
"""Coroutine invoked by an Enumerator once per discovered relative path."""


@runtime_checkable
class InputLogger(Protocol):
    """Severity-leveled logger with printf-style arguments."""

    def debug(self, msg: str, *args: Any) -> None: ...

    def info(self, msg: str, *args: Any) -> None: ...

    def warn(self, msg: str, *args: Any) -> None: ...

    def error(self, msg: str, *args: Any) -> None: ...

    def verbose(self, msg: str, *args: Any) -> None: ...

    def silly(self, msg: str, *args: Any) -> None: ...


class FileHandler(Protocol):
    """Per-file processing strategy supplied by the caller.

    Unstructured traversal calls ``handler(path)``; structured traversal calls
    ``handler(path, date)`` with the date extracted from the file's location.
    Returning normally counts the file as processed. Raising marks the file as
    failed without aborting the traversal.

    Plain callables returning None are accepted as well as coroutines.
    """

    def __call__(
        self, path: str, date: datetime | None = None, /
    ) -> Awaitable[None] | None: ...


class Enumerator(ABC):
    """Contract for discovering files under a root directory.

    Implementations apply ``pattern`` as a glob relative to ``root``, visit at
    most ``limit`` matches, and never run more than ``concurrency`` visitor
    invocations at once. Enumeration errors (missing or unreadable root)
    propagate to the caller.
    """

    @abstractmethod
    async def enumerate(
        self,
        root: str,
        visitor: Visitor,
        *,
        pattern: str,
        limit: int | None = None,
        concurrency: int | None = None,
    ) -> None:
        """Visit every file under ``root`` matching ``pattern``.

        Args:
            root: Directory the pattern is relative to.
            visitor: Coroutine called with each relative POSIX path.
            pattern: Glob pattern (see filedrawer.input.patterns).
            limit: Maximum number of matches to visit, or None for no cap.
            concurrency: Maximum simultaneous visitor invocations
                (None means sequential).
        """
