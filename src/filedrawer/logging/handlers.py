"""Log formatters for filedrawer.

Provides JSONFormatter for machine-readable traversal logs.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

_WORKER_ATTRS = ("worker_id", "file_id", "file_path")


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line.

    Keys:
    - timestamp: ISO-8601 UTC time the record was created
    - level: level name (including VERBOSE and SILLY)
    - logger: logger name, omitted for the root logger
    - message: the formatted message
    - worker: worker context, when the record came from a traversal worker
    - context: remaining ``extra`` attributes
    - exception: formatted traceback, when present
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name

        worker = {
            name: getattr(record, name)
            for name in _WORKER_ATTRS
            if getattr(record, name, None)
        }
        if worker:
            entry["worker"] = worker

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
            and key not in _WORKER_ATTRS
            and key != "worker_tag"
            and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
