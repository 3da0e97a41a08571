"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    2: Interrupted
    10-19: Validation errors (config, profile, arguments)
    20-29: Target/file errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for filedrawer CLI commands."""

    SUCCESS = 0
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Validation errors (10-19)
    CONFIG_ERROR = 11
    PROFILE_NOT_FOUND = 12
    INVALID_ARGUMENTS = 13

    # Target/file errors (20-29)
    TARGET_NOT_FOUND = 20
