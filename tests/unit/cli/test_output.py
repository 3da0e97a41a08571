"""Tests for cli/output.py module."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from filedrawer.cli.exit_codes import ExitCode
from filedrawer.cli.output import ScanReport, error_exit, warning_output


class TestScanReport:
    """Tests for ScanReport."""

    @pytest.mark.asyncio
    async def test_text_lines_printed_as_files_arrive(self, capsys) -> None:
        """Each file should be echoed immediately, then the summary."""
        report = ScanReport("/in", structured=False)

        await report("a.txt")
        assert capsys.readouterr().out == "a.txt\n"

        report.finish(1)
        assert capsys.readouterr().out == "Processed 1 files.\n"

    @pytest.mark.asyncio
    async def test_structured_line_carries_date(self, capsys) -> None:
        """Structured files should print their encoded date after the path."""
        report = ScanReport("/in", structured=True)
        stamp = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)

        await report("2024/01/15/0930-standup.log", stamp)

        assert capsys.readouterr().out == (
            "2024/01/15/0930-standup.log  2024-01-15T09:30:00+00:00\n"
        )

    @pytest.mark.asyncio
    async def test_json_report(self, capsys) -> None:
        """JSON mode should print one document once the scan finishes."""
        report = ScanReport("/in", structured=True, json_output=True)

        await report("2024/01/15-b.txt", None)
        assert capsys.readouterr().out == ""

        report.finish(1)
        payload = json.loads(capsys.readouterr().out)
        assert payload == {
            "status": "completed",
            "message": "Processed 1 files.",
            "processed": 1,
            "input_directory": "/in",
            "structured": True,
            "files": [{"path": "2024/01/15-b.txt", "date": None}],
        }


class TestErrorExit:
    """Tests for error_exit function."""

    def test_human_format_exit(self, capsys) -> None:
        """Human format should print 'Error: message' and exit."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Something failed", ExitCode.CONFIG_ERROR)

        assert exc_info.value.code == 11
        assert capsys.readouterr().err == "Error: Something failed\n"

    def test_json_format_exit(self, capsys) -> None:
        """JSON format should print a JSON error to stderr and exit."""
        with pytest.raises(SystemExit) as exc_info:
            error_exit("Missing", ExitCode.TARGET_NOT_FOUND, json_output=True)

        assert exc_info.value.code == 20
        parsed = json.loads(capsys.readouterr().err)
        assert parsed == {
            "status": "failed",
            "error": {"code": "TARGET_NOT_FOUND", "message": "Missing"},
        }


class TestWarningOutput:
    """Tests for warning_output function."""

    def test_human_warning_output(self, capsys) -> None:
        """Human format should print 'Warning: message'."""
        warning_output("Input directory does not exist")

        assert "Warning: Input directory does not exist" in capsys.readouterr().err

    def test_json_warning_suppressed(self, capsys) -> None:
        """JSON mode should suppress warning output."""
        warning_output("Input directory does not exist", json_output=True)

        captured = capsys.readouterr()
        assert captured.err == ""
        assert captured.out == ""
