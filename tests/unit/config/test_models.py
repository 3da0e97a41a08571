"""Tests for configuration data models."""

from __future__ import annotations

from pathlib import Path

import pytest

from filedrawer.config.logging_factory import build_logging_config
from filedrawer.config.models import InputConfig, LoggingConfig
from filedrawer.input.filename import FilenameComponent
from filedrawer.input.partitions import PartitionScheme


class TestInputConfig:
    """Tests for InputConfig validation."""

    def test_defaults(self) -> None:
        """Defaults should describe a sequential flat traversal."""
        config = InputConfig()
        assert config.concurrency == 1
        assert config.input_structure is PartitionScheme.NONE
        assert config.filename_schema.components == ()

    def test_string_directory_expanded(self) -> None:
        """String directories should become expanded Paths."""
        config = InputConfig(input_directory="~/mail")
        assert config.input_directory == Path("~/mail").expanduser()

    def test_extensions_normalized(self) -> None:
        """Extensions should be normalized on construction."""
        assert InputConfig(extensions=[".eml", "eml", "msg"]).extensions == [
            "eml",
            "msg",
        ]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"concurrency": 0},
            {"limit": 0},
            {"timezone": "Atlantis/Capital"},
            {"input_structure": "fortnight"},
            {"input_filename_options": ["author"]},
        ],
    )
    def test_invalid_values(self, kwargs) -> None:
        """Invalid values should raise ValueError."""
        with pytest.raises(ValueError):
            InputConfig(**kwargs)

    def test_filename_schema(self) -> None:
        """filename_schema should reflect the configured options."""
        config = InputConfig(input_filename_options=["subject", "date"])
        assert config.filename_schema.components == (
            FilenameComponent.DATE,
            FilenameComponent.SUBJECT,
        )

    def test_to_dict(self) -> None:
        """to_dict should give plain values."""
        config = InputConfig(
            input_directory=Path("/in"),
            input_structure="month",
            input_filename_options=["subject", "date"],
        )
        data = config.to_dict()
        assert data["input_directory"] == "/in"
        assert data["input_structure"] == "month"
        assert data["input_filename_options"] == ["date", "subject"]


class TestLoggingConfig:
    """Tests for LoggingConfig validation."""

    def test_custom_levels_accepted(self) -> None:
        """verbose and silly should be valid levels."""
        LoggingConfig(level="verbose")
        LoggingConfig(level="SILLY")

    @pytest.mark.parametrize(
        "kwargs",
        [{"level": "loud"}, {"format": "xml"}, {"max_bytes": -1}, {"backup_count": -1}],
    )
    def test_invalid_values(self, kwargs) -> None:
        """Invalid values should raise ValueError."""
        with pytest.raises(ValueError):
            LoggingConfig(**kwargs)


class TestBuildLoggingConfig:
    """Tests for build_logging_config function."""

    def test_overrides_only_given_values(self) -> None:
        """None overrides should keep the base values."""
        base = LoggingConfig(level="debug", file=Path("/var/log/fd.log"))
        result = build_logging_config(base, format="json")
        assert result.level == "debug"
        assert result.file == Path("/var/log/fd.log")
        assert result.format == "json"
        assert base.format == "text"

    def test_invalid_override(self) -> None:
        """Invalid overrides should fail validation."""
        with pytest.raises(ValueError):
            build_logging_config(LoggingConfig(), level="loud")
