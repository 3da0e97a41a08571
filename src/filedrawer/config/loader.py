"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (FILEDRAWER_*)
3. Config file (~/.filedrawer/config.toml)
4. Default values

Environment variables:
- FILEDRAWER_INPUT_DIRECTORY: Directory to read input files from
- FILEDRAWER_RECURSIVE: Descend into subdirectories (unstructured input)
- FILEDRAWER_EXTENSIONS: Comma-separated extension allow-list
- FILEDRAWER_CONCURRENCY: Maximum simultaneous handler invocations
- FILEDRAWER_LIMIT: Maximum number of files to process
- FILEDRAWER_TIMEZONE: IANA timezone for structured input
- FILEDRAWER_INPUT_STRUCTURE: none, year, month or day
- FILEDRAWER_FILENAME_OPTIONS: Comma-separated filename components
- FILEDRAWER_LOG_LEVEL: Log level
- FILEDRAWER_CONFIG_PATH: Path to config file (overrides default location)
- FILEDRAWER_DATA_DIR: Path to data directory (overrides ~/.filedrawer/)
- FILEDRAWER_FEATURE_<NAME>: "1"/"0" to enable/disable a feature flag
"""

from __future__ import annotations

import logging
import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from filedrawer.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from filedrawer.config.env import EnvReader
from filedrawer.config.exceptions import ConfigParseError, ConfigValidationError
from filedrawer.config.models import FileDrawerConfig
from filedrawer.config.schema import validate_config_file
from filedrawer.feature_flags import Feature
from filedrawer.input.partitions import PartitionScheme

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".filedrawer"
CONFIG_FILE_NAME = "config.toml"

# Cache for loaded config files (path -> (parsed dict, mtime))
_config_cache: dict[Path, tuple[dict[str, Any], float]] = {}
_config_cache_lock = threading.Lock()


def get_data_dir() -> Path:
    """Get the filedrawer data directory.

    Holds config.toml, the profiles/ directory and, by convention, logs/.
    Can be overridden by the FILEDRAWER_DATA_DIR environment variable.

    Returns:
        Path to the data directory (~/.filedrawer/ by default).
    """
    env_path = os.environ.get("FILEDRAWER_DATA_DIR")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_DIR


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by the FILEDRAWER_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("FILEDRAWER_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return get_data_dir() / CONFIG_FILE_NAME


def _load_toml_file(path: Path, strict: bool) -> dict[str, Any]:
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}
    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigParseError(path, str(e)) from e
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}
    logger.debug("Loaded config from %s", path)
    return config


def load_config_file(
    path: Path | None = None, *, strict: bool = False
) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Results are cached with mtime-based invalidation. Use
    clear_config_cache() to force a reload regardless of mtime.

    Thread-safe: uses a lock to protect concurrent access to the cache.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigParseError on parse failures.
            If False (default), return an empty dict on errors.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigParseError: When strict=True and the file cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        result = _load_toml_file(path, strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache.

    Primarily useful for testing.
    """
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    cli_source: ConfigSource | None = None,
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> FileDrawerConfig:
    """Get filedrawer configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides FILEDRAWER_CONFIG_PATH).
        cli_source: Values given on the command line (highest precedence).
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigParseError on config file parse
            failures instead of falling back to defaults.

    Returns:
        FileDrawerConfig with merged configuration.

    Raises:
        ConfigParseError: When strict=True and the file cannot be parsed.
        ConfigValidationError: If the config file or a merged value is
            invalid.
    """
    reader = env_reader or EnvReader()

    file_model = validate_config_file(load_config_file(config_path, strict=strict))

    builder = ConfigBuilder(env=reader)
    builder.apply(source_from_file(file_model), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    if cli_source is not None:
        builder.apply(cli_source, source_name="cli")

    try:
        return builder.build()
    except ValueError as e:
        raise ConfigValidationError(f"Invalid configuration: {e}") from e


def validate_config(config: FileDrawerConfig) -> list[str]:
    """Validate cross-field configuration constraints.

    Checks beyond what individual __post_init__ methods validate, such as
    the input directory existing and structured input being consistent
    with the filename options.

    Args:
        config: The configuration to validate.

    Returns:
        List of error strings. Empty list means configuration is valid.
    """
    errors: list[str] = []
    inp = config.input

    if inp.input_directory is not None:
        if not inp.input_directory.exists():
            errors.append(f"Input directory does not exist: {inp.input_directory}")
        elif not inp.input_directory.is_dir():
            errors.append(f"Input directory is not a directory: {inp.input_directory}")

    if Feature.STRUCTURED_INPUT.value in config.features:
        schema = inp.filename_schema
        try:
            schema.validate_for(inp.input_structure)
        except ValueError as e:
            errors.append(str(e))
    elif inp.input_structure is not PartitionScheme.NONE:
        errors.append(
            f"Input structure {inp.input_structure.value!r} has no effect "
            f"unless feature '{Feature.STRUCTURED_INPUT.value}' is enabled"
        )

    if Feature.STRUCTURED_INPUT.value in config.features and inp.recursive:
        errors.append("recursive has no effect with structured input")

    if (
        inp.input_filename_options
        and Feature.STRUCTURED_INPUT.value not in config.features
    ):
        errors.append(
            "Filename options have no effect unless feature "
            f"'{Feature.STRUCTURED_INPUT.value}' is enabled"
        )

    return errors
