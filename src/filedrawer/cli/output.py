"""Scan reporting and error exits for the filedrawer CLI.

In text mode files are printed one per line as the reader hands them over,
followed by a summary line. In JSON mode nothing is printed until the scan
finishes, then a single document lists every file.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, NoReturn

import click

from filedrawer.cli.exit_codes import ExitCode


@dataclass
class ScanReport:
    """Files seen during a scan.

    The report is itself the file handler given to the input reader. For
    structured input each record also carries the file's encoded date.
    """

    input_directory: str
    structured: bool
    json_output: bool = False
    files: list[dict[str, Any]] = field(default_factory=list)

    async def __call__(self, path: str, *args: Any) -> None:
        record: dict[str, Any] = {"path": path}
        if self.structured:
            file_date: datetime | None = args[0] if args else None
            record["date"] = file_date.isoformat() if file_date else None
        self.files.append(record)
        if not self.json_output:
            click.echo(self._line(record))

    def _line(self, record: dict[str, Any]) -> str:
        if record.get("date"):
            return f"{record['path']}  {record['date']}"
        return record["path"]

    def to_dict(self, processed: int) -> dict[str, Any]:
        return {
            "status": "completed",
            "message": f"Processed {processed} files.",
            "processed": processed,
            "input_directory": self.input_directory,
            "structured": self.structured,
            "files": self.files,
        }

    def finish(self, processed: int) -> None:
        """Print the summary, or the whole report as JSON."""
        summary = self.to_dict(processed)
        if self.json_output:
            click.echo(json.dumps(summary, indent=2))
        else:
            click.echo(summary["message"])


def error_exit(message: str, code: ExitCode, json_output: bool = False) -> NoReturn:
    """Print an error to stderr and exit with ``code``."""
    if json_output:
        payload = {
            "status": "failed",
            "error": {"code": code.name, "message": message},
        }
        click.echo(json.dumps(payload), err=True)
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def warning_output(message: str, json_output: bool = False) -> None:
    """Print a warning to stderr; silent in JSON mode."""
    if not json_output:
        click.echo(f"Warning: {message}", err=True)
