"""Environment variable reader with dependency injection support.

This module provides the EnvReader class for reading and parsing environment
variables with type conversion and validation. It accepts an optional env
mapping so tests never have to touch os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        reader = EnvReader(env={"FILEDRAWER_CONCURRENCY": "4"})
        reader.get_int("FILEDRAWER_CONCURRENCY")  # Returns 4
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    @property
    def environ(self) -> Mapping[str, str]:
        """The mapping variables are read from."""
        return self._env

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string from an environment variable.

        Empty values are treated as unset.
        """
        value = self._env.get(var)
        if not value:
            return default
        return value

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer from an environment variable.

        Args:
            var: Environment variable name.
            default: Default value if not set or invalid.

        Returns:
            Parsed integer value, or default if not set or invalid.
            Logs a warning if the value is set but cannot be parsed.
        """
        value = self._env.get(var)
        if value is None or value == "":
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean from an environment variable.

        "true", "1", "yes" and "on" (case-insensitive) are true; any other
        non-empty value is false.
        """
        value = self._env.get(var)
        if value is None or value == "":
            return default
        return value.lower() in _TRUE_VALUES

    def get_path(
        self, var: str, must_exist: bool = False, default: Path | None = None
    ) -> Path | None:
        """Get a path from an environment variable.

        Args:
            var: Environment variable name.
            must_exist: If True, return ``default`` (with a warning) when
                the path does not exist.
            default: Default value if not set.

        Returns:
            Expanded Path, or default.
        """
        value = self._env.get(var)
        if not value:
            return default

        path = Path(value).expanduser()
        if must_exist and not path.exists():
            logger.warning(
                "Environment variable %s points to non-existent path: %s",
                var,
                value,
            )
            return default
        return path

    def get_list(
        self, var: str, separator: str = ",", default: list[str] | None = None
    ) -> list[str] | None:
        """Get a list of strings from an environment variable.

        Items are stripped and empty items dropped, so "eml, msg," gives
        ["eml", "msg"].

        Returns:
            List of items, or default if not set.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return [part.strip() for part in value.split(separator) if part.strip()]
