"""Root logger setup for the filedrawer CLI.

Log records go to a size-rotated file when ``logging.file`` is set and to
stderr otherwise. Every handler is tagged with the worker context of the
traversal task that emitted the record.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from filedrawer.logging.context import WorkerContextFilter
from filedrawer.logging.handlers import JSONFormatter
from filedrawer.logging.levels import LEVEL_MAP

if TYPE_CHECKING:
    from filedrawer.config.models import LoggingConfig

TEXT_FORMAT = "%(asctime)s - %(worker_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def build_formatter(log_format: str) -> logging.Formatter:
    """Formatter for a ``logging.format`` value; anything but json is text."""
    if log_format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def open_log_file(config: LoggingConfig) -> RotatingFileHandler | None:
    """Open the configured log file, creating its directory.

    Returns:
        The rotating handler, or None when no file is configured or it
        cannot be opened. The latter is reported on stderr.
    """
    if not config.file:
        return None
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def build_handlers(config: LoggingConfig) -> list[logging.Handler]:
    """Handlers for ``config``: the log file, stderr, or both."""
    handlers: list[logging.Handler] = []
    file_handler = open_log_file(config)
    if file_handler is not None:
        handlers.append(file_handler)
    if config.include_stderr or file_handler is None:
        handlers.append(logging.StreamHandler(sys.stderr))
    return handlers


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to ``config``."""
    level = LEVEL_MAP.get(config.level.casefold(), logging.INFO)
    formatter = build_formatter(config.format)
    worker_filter = WorkerContextFilter()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for handler in build_handlers(config):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(worker_filter)
        root.addHandler(handler)
