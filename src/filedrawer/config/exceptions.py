"""Custom exceptions for configuration loading.

These are raised while reading the config file and assembling the effective
configuration, before any input is processed.
"""

from __future__ import annotations

from pathlib import Path


class ConfigError(Exception):
    """Base exception for configuration errors.

    All configuration exceptions inherit from this class, allowing callers
    to catch them with a single except clause if desired.
    """


class ConfigParseError(ConfigError):
    """Raised when the config file is not valid TOML.

    Attributes:
        path: Path of the file that failed to parse.
    """

    def __init__(self, path: Path, detail: str) -> None:
        """Initialize the exception.

        Args:
            path: Path of the file that failed to parse.
            detail: Parser error message.
        """
        self.path = path
        super().__init__(f"Failed to parse config file {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Raised when a configuration value is invalid.

    Attributes:
        field: Dotted name of the offending setting, if known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)
