"""CLI command for scanning an input directory."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

import click

from filedrawer.cli.exit_codes import ExitCode
from filedrawer.cli.output import ScanReport, error_exit, warning_output
from filedrawer.cli.profile_loader import load_profile_or_exit
from filedrawer.config import get_config, merge_profile_with_config, validate_config
from filedrawer.config.exceptions import ConfigError
from filedrawer.config.models import FileDrawerConfig, InputConfig
from filedrawer.core import parse_window_bound
from filedrawer.feature_flags import Feature, log_enabled_flags, resolve_features
from filedrawer.input import (
    FilenameComponent,
    InputError,
    InputReader,
    PartitionScheme,
    WindowNotAllowedError,
    WindowRequiredError,
)
from filedrawer.input.models import resolve_timezone
from filedrawer.logging import wrap_logger

logger = logging.getLogger(__name__)


def _input_overrides(**options: Any) -> dict[str, Any]:
    """Keep only the options given on the command line."""
    overrides: dict[str, Any] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, tuple):
            if not value:
                continue
            value = list(value)
        overrides[key] = value
    return overrides


def _parse_window(
    start: str | None, end: str | None, timezone: str, json_output: bool
) -> tuple[datetime | None, datetime | None]:
    tz = resolve_timezone(timezone)
    try:
        start_dt = parse_window_bound(start, tz) if start else None
        end_dt = parse_window_bound(end, tz, end=True) if end else None
    except ValueError as e:
        error_exit(str(e), ExitCode.INVALID_ARGUMENTS, json_output)
    return start_dt, end_dt


def _resolve_config(
    ctx: click.Context,
    profile: str | None,
    overrides: dict[str, Any],
    json_output: bool,
) -> FileDrawerConfig:
    config_path: Path | None = (ctx.obj or {}).get("config_path")
    try:
        config = get_config(config_path=config_path)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)

    if profile:
        loaded = load_profile_or_exit(profile, json_output)
        try:
            config = merge_profile_with_config(loaded, config)
        except (TypeError, ValueError) as e:
            error_exit(
                f"Invalid profile {profile}: {e}", ExitCode.CONFIG_ERROR, json_output
            )

    try:
        input_config: InputConfig = replace(config.input, **overrides)
        features = resolve_features(config.features)
    except ValueError as e:
        error_exit(str(e), ExitCode.INVALID_ARGUMENTS, json_output)

    return replace(config, input=input_config, features=features)


@click.command("scan")
@click.argument(
    "input_directory",
    required=False,
    type=click.Path(path_type=Path),
)
@click.option(
    "--recursive/--no-recursive",
    default=None,
    help="Descend into subdirectories (unstructured input only).",
)
@click.option(
    "--extension",
    "-e",
    "extensions",
    multiple=True,
    help="Only process files with this extension. Repeatable.",
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of files to process.",
)
@click.option(
    "--concurrency",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of files processed at once.",
)
@click.option(
    "--timezone",
    default=None,
    help="IANA timezone for partition boundaries (default: Etc/UTC).",
)
@click.option(
    "--structure",
    "input_structure",
    type=click.Choice([s.value for s in PartitionScheme]),
    default=None,
    help="Date hierarchy of structured input.",
)
@click.option(
    "--filename-option",
    "input_filename_options",
    multiple=True,
    type=click.Choice([c.value for c in FilenameComponent]),
    help="Component encoded in structured filenames. Repeatable.",
)
@click.option(
    "--start",
    default=None,
    help="Window start: YYYY-MM-DD, ISO-8601 timestamp, or relative (7d).",
)
@click.option(
    "--end",
    default=None,
    help="Window end (inclusive), same formats as --start.",
)
@click.option(
    "--profile",
    "-p",
    default=None,
    help="Use named profile from ~/.filedrawer/profiles/.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output in JSON format.",
)
@click.pass_context
def scan(
    ctx: click.Context,
    input_directory: Path | None,
    recursive: bool | None,
    extensions: tuple[str, ...],
    limit: int | None,
    concurrency: int | None,
    timezone: str | None,
    input_structure: str | None,
    input_filename_options: tuple[str, ...],
    start: str | None,
    end: str | None,
    profile: str | None,
    json_output: bool,
) -> None:
    """Scan an input directory and list the files that would be processed.

    Files are read flat (or recursively) by default. With the
    structured-input feature enabled, the directory is read as date
    partitions and --start/--end select the window.

    Examples:

        filedrawer scan /var/mail/archive -e eml --recursive

        FILEDRAWER_FEATURE_STRUCTURED_INPUT=1 filedrawer scan /logs \\
            --structure day --filename-option time --filename-option subject \\
            --start 2024-01-15 --end 2024-01-16
    """
    overrides = _input_overrides(
        input_directory=input_directory,
        recursive=recursive,
        extensions=extensions,
        limit=limit,
        concurrency=concurrency,
        timezone=timezone,
        input_structure=input_structure,
        input_filename_options=input_filename_options,
    )
    config = _resolve_config(ctx, profile, overrides, json_output)

    for problem in validate_config(config):
        warning_output(problem, json_output)

    start_dt, end_dt = _parse_window(
        start, end, config.input.timezone, json_output
    )

    log_enabled_flags(config.features)
    structured = Feature.STRUCTURED_INPUT.value in config.features
    report = ScanReport(str(config.input.input_directory), structured, json_output)
    reader = InputReader(config.input, config.features, wrap_logger())

    try:
        processed = asyncio.run(reader.process(report, start_dt, end_dt))
    except (WindowRequiredError, WindowNotAllowedError) as e:
        error_exit(str(e), ExitCode.INVALID_ARGUMENTS, json_output)
    except InputError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)
    except ValueError as e:
        # Filename schema not valid for the partition scheme
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)
    except (FileNotFoundError, NotADirectoryError, PermissionError) as e:
        error_exit(str(e), ExitCode.TARGET_NOT_FOUND, json_output)
    except KeyboardInterrupt:
        error_exit("Interrupted", ExitCode.INTERRUPTED, json_output)

    report.finish(processed)
