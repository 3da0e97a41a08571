"""Six-level logger capability backed by the stdlib logging module.

The input scanners log through an injected object exposing ``debug``,
``info``, ``warn``, ``error``, ``verbose`` and ``silly``. ProgramLogger
provides that surface over a ``logging.Logger`` and prefixes every message
with the program name, e.g. ``[filedrawer] Processing file %s``.
"""

from __future__ import annotations

import logging
from typing import Any

from filedrawer.logging.levels import SILLY, VERBOSE

DEFAULT_PROGRAM_NAME = "filedrawer"


class ProgramLogger:
    """Prefixing wrapper exposing the six-level input logger interface.

    Arguments are passed through untouched so %-style formatting stays lazy.
    """

    def __init__(self, logger: logging.Logger, program_name: str) -> None:
        self._logger = logger
        self.program_name = program_name
        self._prefix = f"[{program_name}] "

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _log(self, level: int, msg: str, args: tuple[Any, ...]) -> None:
        if self._logger.isEnabledFor(level):
            # stacklevel 3: skip _log and the public method
            self._logger.log(level, self._prefix + msg, *args, stacklevel=3)

    def debug(self, msg: str, *args: Any) -> None:
        self._log(logging.DEBUG, msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._log(logging.INFO, msg, args)

    def warn(self, msg: str, *args: Any) -> None:
        self._log(logging.WARNING, msg, args)

    def error(self, msg: str, *args: Any) -> None:
        self._log(logging.ERROR, msg, args)

    def verbose(self, msg: str, *args: Any) -> None:
        self._log(VERBOSE, msg, args)

    def silly(self, msg: str, *args: Any) -> None:
        self._log(SILLY, msg, args)


def wrap_logger(
    logger: logging.Logger | str | None = None,
    program_name: str = DEFAULT_PROGRAM_NAME,
) -> ProgramLogger:
    """Wrap a stdlib logger in the six-level prefixing interface.

    Args:
        logger: Logger instance or logger name. Defaults to the
            "filedrawer" logger.
        program_name: Name placed in the message prefix.

    Returns:
        ProgramLogger delegating to the given logger.
    """
    if logger is None or isinstance(logger, str):
        logger = logging.getLogger(logger or DEFAULT_PROGRAM_NAME)
    return ProgramLogger(logger, program_name)
