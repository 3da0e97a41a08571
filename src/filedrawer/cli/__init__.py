"""CLI module for filedrawer."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from filedrawer.cli.exit_codes import ExitCode
from filedrawer.cli.output import error_exit
from filedrawer.logging.levels import LEVEL_MAP

logger = logging.getLogger(__name__)


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the config file and CLI options."""
    from filedrawer.config import build_logging_config, get_config
    from filedrawer.config.exceptions import ConfigError
    from filedrawer.logging import configure_logging

    try:
        config = get_config(config_path=config_path)
        logging_config = build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    except (ConfigError, ValueError) as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)
    configure_logging(logging_config)


def _log_startup_settings(config_path: Path | None) -> None:
    """Log where configuration is read from."""
    from filedrawer.config.loader import get_data_dir, get_default_config_path

    path = config_path or get_default_config_path()
    home = str(Path.home())
    logger.debug(
        "filedrawer starting: data_dir=%s, config=%s (%s)",
        str(get_data_dir()).replace(home, "~"),
        str(path).replace(home, "~"),
        "found" if path.exists() else "missing",
    )


@click.group()
@click.version_option(package_name="filedrawer")
@click.option(
    "--log-level",
    type=click.Choice(list(LEVEL_MAP), case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file path. Default: ~/.filedrawer/config.toml",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """filedrawer - Feed files from an input directory to a handler."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    _configure_logging(config_path, log_level, log_file, log_json)
    _log_startup_settings(config_path)


def _register_commands() -> None:
    from filedrawer.cli.config_cmd import config_group
    from filedrawer.cli.scan import scan

    main.add_command(scan)
    main.add_command(config_group)


_register_commands()
