"""Unit tests for the scan command."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from filedrawer.cli import main
from filedrawer.cli.exit_codes import ExitCode
from filedrawer.cli.scan import _input_overrides
from filedrawer.input import (
    ConfigMissingError,
    PartitionScheme,
    WindowNotAllowedError,
    WindowRequiredError,
)

# =============================================================================
# Fixtures
# =============================================================================


class RecordingReader:
    """Stand-in for InputReader that feeds a fixed list of files."""

    instances: list[RecordingReader] = []
    files: list[tuple] = []
    error: BaseException | None = None

    def __init__(self, config, features, logger, enumerator=None) -> None:
        self.config = config
        self.features = features
        self.window: tuple | None = None
        RecordingReader.instances.append(self)

    async def process(self, handler, start=None, end=None) -> int:
        self.window = (start, end)
        if RecordingReader.error is not None:
            raise RecordingReader.error
        for args in RecordingReader.files:
            await handler(*args)
        return len(RecordingReader.files)


@pytest.fixture(autouse=True)
def reader():
    RecordingReader.instances = []
    RecordingReader.files = [("a.txt",), ("b.eml",)]
    RecordingReader.error = None
    with (
        patch("filedrawer.cli.scan.InputReader", RecordingReader),
        patch("filedrawer.logging.configure_logging"),
    ):
        yield RecordingReader


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# =============================================================================
# Option handling
# =============================================================================


class TestInputOverrides:
    """Tests for _input_overrides helper."""

    def test_drops_unset_options(self) -> None:
        """None and empty tuples should not override configuration."""
        assert _input_overrides(limit=None, extensions=(), recursive=False) == {
            "recursive": False
        }

    def test_tuples_become_lists(self) -> None:
        """Repeated options should be passed on as lists."""
        assert _input_overrides(extensions=("eml", "msg")) == {
            "extensions": ["eml", "msg"]
        }


class TestScanOptions:
    """Tests for how scan builds the input configuration."""

    def test_options_reach_config(self, runner: CliRunner, tmp_path: Path) -> None:
        """CLI options should override the configured input settings."""
        result = runner.invoke(
            main,
            [
                "scan",
                str(tmp_path),
                "--recursive",
                "-e",
                "eml",
                "-e",
                ".msg",
                "--limit",
                "5",
                "-j",
                "3",
                "--timezone",
                "Europe/Paris",
            ],
        )

        assert result.exit_code == 0, result.output
        config = RecordingReader.instances[0].config
        assert config.input_directory == tmp_path
        assert config.recursive is True
        assert config.extensions == ["eml", "msg"]
        assert config.limit == 5
        assert config.concurrency == 3
        assert config.timezone == "Europe/Paris"

    def test_environment_used(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """FILEDRAWER_* variables should fill in unset options."""
        monkeypatch.setenv("FILEDRAWER_INPUT_DIRECTORY", str(tmp_path))
        monkeypatch.setenv("FILEDRAWER_CONCURRENCY", "4")

        result = runner.invoke(main, ["scan", "-j", "2"])

        assert result.exit_code == 0, result.output
        config = RecordingReader.instances[0].config
        assert config.input_directory == tmp_path
        assert config.concurrency == 2

    def test_profile_applied(
        self, runner: CliRunner, tmp_path: Path, data_dir: Path
    ) -> None:
        """Profile settings should apply beneath CLI options."""
        profiles = data_dir / "profiles"
        profiles.mkdir(parents=True)
        (profiles / "logs.yaml").write_text(
            f"input:\n  input_directory: {tmp_path}\n  limit: 9\n"
            "  input_structure: month\n"
        )

        result = runner.invoke(main, ["scan", "-p", "logs", "--limit", "2"])

        assert result.exit_code == 0, result.output
        config = RecordingReader.instances[0].config
        assert config.input_directory == tmp_path
        assert config.limit == 2
        assert config.input_structure is PartitionScheme.MONTH

    def test_profile_not_found(self, runner: CliRunner, data_dir: Path) -> None:
        """A missing profile should list the available ones."""
        profiles = data_dir / "profiles"
        profiles.mkdir(parents=True)
        (profiles / "mail.yaml").write_text("{}\n")

        result = runner.invoke(main, ["scan", "-p", "nope"])

        assert result.exit_code == ExitCode.PROFILE_NOT_FOUND
        assert "Profile not found: nope" in result.output
        assert "  - mail" in result.output

    def test_window_parsed_in_timezone(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Bare dates should cover whole days in the configured zone."""
        monkeypatch.setenv("FILEDRAWER_FEATURE_STRUCTURED_INPUT", "1")

        result = runner.invoke(
            main,
            [
                "scan",
                str(tmp_path),
                "--structure",
                "day",
                "--timezone",
                "America/New_York",
                "--start",
                "2024-01-15",
                "--end",
                "2024-01-15",
            ],
        )

        assert result.exit_code == 0, result.output
        start, end = RecordingReader.instances[0].window
        assert start.astimezone(timezone.utc) == datetime(
            2024, 1, 15, 5, 0, tzinfo=timezone.utc
        )
        assert (end.hour, end.minute, end.microsecond) == (23, 59, 999999)
        assert "structured-input" in RecordingReader.instances[0].features

    def test_config_warnings(self, runner: CliRunner, tmp_path: Path) -> None:
        """Configuration problems should be shown as warnings."""
        result = runner.invoke(main, ["scan", str(tmp_path / "missing")])
        assert "Warning: Input directory does not exist" in result.output


# =============================================================================
# Output
# =============================================================================


class TestScanOutput:
    """Tests for scan output formats."""

    def test_text_output(self, runner: CliRunner, tmp_path: Path) -> None:
        """Each file and a summary should be printed."""
        result = runner.invoke(main, ["scan", str(tmp_path)])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines == ["a.txt", "b.eml", "Processed 2 files."]

    def test_json_output(self, runner: CliRunner, tmp_path: Path) -> None:
        """JSON output should list the files and the count."""
        result = runner.invoke(main, ["scan", str(tmp_path), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["status"] == "completed"
        assert payload["processed"] == 2
        assert payload["structured"] is False
        assert payload["files"] == [{"path": "a.txt"}, {"path": "b.eml"}]

    def test_structured_dates(
        self,
        runner: CliRunner,
        tmp_path: Path,
        reader,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Structured output should include each file's date."""
        monkeypatch.setenv("FILEDRAWER_FEATURE_STRUCTURED_INPUT", "1")
        stamp = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)
        reader.files = [("2024/01/15/0930-standup.log", stamp)]

        result = runner.invoke(
            main,
            [
                "scan",
                str(tmp_path),
                "--structure",
                "day",
                "--start",
                "2024-01-15",
                "--end",
                "2024-01-15",
                "--json",
            ],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["structured"] is True
        assert payload["files"] == [
            {
                "path": "2024/01/15/0930-standup.log",
                "date": "2024-01-15T09:30:00+00:00",
            }
        ]


# =============================================================================
# Exit codes
# =============================================================================


class TestScanExitCodes:
    """Tests for scan error handling."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (WindowRequiredError(), ExitCode.INVALID_ARGUMENTS),
            (WindowNotAllowedError(), ExitCode.INVALID_ARGUMENTS),
            (ConfigMissingError("input_directory"), ExitCode.CONFIG_ERROR),
            (ValueError("bad schema"), ExitCode.CONFIG_ERROR),
            (FileNotFoundError("gone"), ExitCode.TARGET_NOT_FOUND),
            (PermissionError("denied"), ExitCode.TARGET_NOT_FOUND),
        ],
    )
    def test_errors_mapped(
        self,
        runner: CliRunner,
        tmp_path: Path,
        reader,
        error: BaseException,
        code: ExitCode,
    ) -> None:
        """Traversal errors should map to their exit codes."""
        reader.error = error
        result = runner.invoke(main, ["scan", str(tmp_path)])
        assert result.exit_code == code
        assert f"Error: {error}" in result.output

    def test_json_error(self, runner: CliRunner, tmp_path: Path, reader) -> None:
        """Errors should be reported as JSON with --json."""
        reader.error = WindowNotAllowedError()

        result = runner.invoke(main, ["scan", str(tmp_path), "--json"])

        assert result.exit_code == ExitCode.INVALID_ARGUMENTS
        payload = json.loads(result.output)
        assert payload["error"]["code"] == "INVALID_ARGUMENTS"

    def test_invalid_window_value(self, runner: CliRunner, tmp_path: Path) -> None:
        """Unparseable window bounds should be rejected before traversal."""
        result = runner.invoke(main, ["scan", str(tmp_path), "--start", "someday"])
        assert result.exit_code == ExitCode.INVALID_ARGUMENTS
        assert RecordingReader.instances == []

    def test_invalid_timezone(self, runner: CliRunner, tmp_path: Path) -> None:
        """Unknown timezones should be rejected as invalid arguments."""
        result = runner.invoke(
            main, ["scan", str(tmp_path), "--timezone", "Mars/Olympus"]
        )
        assert result.exit_code == ExitCode.INVALID_ARGUMENTS
        assert "Unknown timezone" in result.output

    def test_limit_must_be_positive(self, runner: CliRunner, tmp_path: Path) -> None:
        """Click should reject a zero limit."""
        result = runner.invoke(main, ["scan", str(tmp_path), "--limit", "0"])
        assert result.exit_code == 2
