"""Structured logging module for filedrawer.

Provides configurable logging with JSON format support and file rotation,
worker context tagging for concurrent traversal, and the six-level
prefixing logger the input scanners consume.
"""

from filedrawer.logging.adapter import ProgramLogger, wrap_logger
from filedrawer.logging.config import configure_logging
from filedrawer.logging.context import (
    WorkerContext,
    WorkerContextFilter,
    get_worker_context,
    worker_context,
)
from filedrawer.logging.handlers import JSONFormatter
from filedrawer.logging.levels import SILLY, VERBOSE

__all__ = [
    "JSONFormatter",
    "ProgramLogger",
    "SILLY",
    "VERBOSE",
    "WorkerContext",
    "WorkerContextFilter",
    "configure_logging",
    "get_worker_context",
    "worker_context",
    "wrap_logger",
]
