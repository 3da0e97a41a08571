"""Shared profile loading with consistent error handling."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn

import click

from filedrawer.cli.exit_codes import ExitCode
from filedrawer.cli.output import error_exit
from filedrawer.config.profiles import (
    ProfileError,
    ProfileNotFoundError,
    list_profiles,
    load_profile,
)

if TYPE_CHECKING:
    from filedrawer.config.models import Profile


def load_profile_or_exit(profile_name: str, json_output: bool = False) -> Profile:
    """Load a profile, exiting with a helpful message on failure.

    A missing profile lists the available ones; an invalid profile exits
    with ExitCode.CONFIG_ERROR.
    """
    try:
        return load_profile(profile_name)
    except ProfileNotFoundError as e:
        _show_available_profiles_and_exit(str(e), json_output)
    except ProfileError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR, json_output)


def _show_available_profiles_and_exit(error_msg: str, json_output: bool) -> NoReturn:
    if json_output:
        error_exit(error_msg, ExitCode.PROFILE_NOT_FOUND, json_output)
    click.echo(f"Error: {error_msg}", err=True)
    available = list_profiles()
    if available:
        click.echo("\nAvailable profiles:", err=True)
        for name in available:
            click.echo(f"  - {name}", err=True)
    sys.exit(ExitCode.PROFILE_NOT_FOUND)
