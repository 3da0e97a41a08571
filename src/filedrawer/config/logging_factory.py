"""Logging configuration factory.

Merges the logging options given on the command line into the configured
LoggingConfig.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from filedrawer.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Build LoggingConfig by merging base config with CLI overrides.

    Args:
        base: Base logging configuration (config file, env, profile).
        level: Override log level. If None, uses base.level.
        file: Override log file path. If None, uses base.file.
        format: Override log format (text, json). If None, uses base.format.
        include_stderr: Override stderr inclusion.

    Returns:
        New LoggingConfig. Validation runs via LoggingConfig.__post_init__,
        so invalid values raise ValueError.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(base, **{k: v for k, v in overrides.items() if v is not None})
