"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building FileDrawerConfig by
composing multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from filedrawer.config.env import EnvReader
from filedrawer.config.models import FileDrawerConfig, InputConfig, LoggingConfig
from filedrawer.config.schema import ConfigFileModel
from filedrawer.feature_flags import DEFAULT_FEATURES, resolve_features

logger = logging.getLogger(__name__)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Input config
    input_directory: Path | None = None
    recursive: bool | None = None
    extensions: list[str] | None = None
    concurrency: int | None = None
    limit: int | None = None
    timezone: str | None = None
    input_structure: str | None = None
    input_filename_options: list[str] | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None

    # Features
    features: list[str] | None = None


class ConfigBuilder:
    """Builds FileDrawerConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_model), source_name="file")
        builder.apply(source_from_env(reader), source_name="env")
        builder.apply(cli_source, source_name="cli")
        config = builder.build()
    """

    def __init__(self, env: EnvReader | None = None) -> None:
        """Initialize the builder with no values set.

        Args:
            env: Reader used for FILEDRAWER_FEATURE_* overrides at build time.
        """
        self._values: dict[str, Any] = {}
        self._origins: dict[str, str] = {}
        self._env = env

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value (for diagnostics).
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._origins[field_obj.name] = source_name

    def origin_of(self, key: str) -> str:
        """Name of the source that supplied a value ("default" if none)."""
        return self._origins.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> FileDrawerConfig:
        """Build the final FileDrawerConfig with defaults for unset values.

        Returns:
            Complete FileDrawerConfig.

        Raises:
            ValueError: If a merged value fails model validation.
        """
        input_config = InputConfig(
            input_directory=self._get("input_directory", None),
            recursive=self._get("recursive", False),
            extensions=list(self._get("extensions", [])),
            concurrency=self._get("concurrency", 1),
            limit=self._get("limit", None),
            timezone=self._get("timezone", "Etc/UTC"),
            input_structure=self._get("input_structure", "none"),
            input_filename_options=list(self._get("input_filename_options", [])),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        env = self._env.environ if self._env is not None else None
        features = resolve_features(self._get("features", DEFAULT_FEATURES), env)

        for key in sorted(self._origins):
            logger.debug("Config %s from %s", key, self._origins[key])

        return FileDrawerConfig(
            input=input_config,
            logging=logging_config,
            features=features,
        )


def _expand(value: str | None) -> Path | None:
    return Path(value).expanduser() if value else None


def source_from_file(file_config: ConfigFileModel) -> ConfigSource:
    """Create ConfigSource from a validated config file.

    Args:
        file_config: Validated config file model.

    Returns:
        ConfigSource with values from the config file.
    """
    inp = file_config.input
    log = file_config.logging
    return ConfigSource(
        input_directory=_expand(inp.input_directory),
        recursive=inp.recursive,
        extensions=inp.extensions,
        concurrency=inp.concurrency,
        limit=inp.limit,
        timezone=inp.timezone,
        input_structure=inp.input_structure,
        input_filename_options=inp.input_filename_options,
        logging_level=log.level,
        logging_file=_expand(log.file),
        logging_format=log.format,
        logging_include_stderr=log.include_stderr,
        logging_max_bytes=log.max_bytes,
        logging_backup_count=log.backup_count,
        features=file_config.features.enabled,
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from FILEDRAWER_* environment variables.

    Args:
        reader: Environment reader.

    Returns:
        ConfigSource with values from the environment.
    """
    return ConfigSource(
        input_directory=reader.get_path("FILEDRAWER_INPUT_DIRECTORY"),
        recursive=reader.get_bool("FILEDRAWER_RECURSIVE"),
        extensions=reader.get_list("FILEDRAWER_EXTENSIONS"),
        concurrency=reader.get_int("FILEDRAWER_CONCURRENCY"),
        limit=reader.get_int("FILEDRAWER_LIMIT"),
        timezone=reader.get_str("FILEDRAWER_TIMEZONE"),
        input_structure=reader.get_str("FILEDRAWER_INPUT_STRUCTURE"),
        input_filename_options=reader.get_list("FILEDRAWER_FILENAME_OPTIONS"),
        logging_level=reader.get_str("FILEDRAWER_LOG_LEVEL"),
    )
