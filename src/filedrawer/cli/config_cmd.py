"""CLI commands for inspecting configuration."""

from __future__ import annotations

import json
from pathlib import Path

import click

from filedrawer.cli.exit_codes import ExitCode
from filedrawer.cli.output import error_exit
from filedrawer.config import get_config, get_default_config_path, validate_config
from filedrawer.config.exceptions import ConfigError


@click.group("config")
def config_group() -> None:
    """Inspect filedrawer configuration."""


@config_group.command("show")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output in JSON format.",
)
@click.pass_context
def show_command(ctx: click.Context, json_output: bool) -> None:
    """Show the effective configuration after all layers are applied."""
    config_path: Path | None = (ctx.obj or {}).get("config_path")
    try:
        config = get_config(config_path=config_path)
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)

    source = config_path or get_default_config_path()
    problems = validate_config(config)

    if json_output:
        payload = {
            "config_file": str(source),
            "config_file_exists": source.exists(),
            "input": config.input.to_dict(),
            "logging": {
                "level": config.logging.level,
                "file": str(config.logging.file) if config.logging.file else None,
                "format": config.logging.format,
            },
            "features": sorted(config.features),
            "problems": problems,
        }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Config file: {source}{'' if source.exists() else ' (not found)'}")
    click.echo("")
    click.echo("[input]")
    for key, value in config.input.to_dict().items():
        if isinstance(value, list):
            value = ", ".join(value) if value else "(any)"
        elif value is None:
            value = "(not set)"
        click.echo(f"  {key}: {value}")
    click.echo("")
    click.echo("[logging]")
    click.echo(f"  level: {config.logging.level}")
    click.echo(f"  file: {config.logging.file or '(stderr)'}")
    click.echo(f"  format: {config.logging.format}")
    click.echo("")
    click.echo(f"Features: {', '.join(sorted(config.features)) or '(none)'}")

    if problems:
        click.echo("")
        click.echo("Problems:")
        for problem in problems:
            click.echo(f"  - {problem}")
