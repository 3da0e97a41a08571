"""Configuration management for filedrawer.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (FILEDRAWER_*)
3. Config file (~/.filedrawer/config.toml)
4. Default values (lowest priority)

Named profiles (~/.filedrawer/profiles/*.yaml) are merged over the loaded
configuration before CLI flags are applied.
"""

from filedrawer.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from filedrawer.config.env import EnvReader
from filedrawer.config.exceptions import (
    ConfigError,
    ConfigParseError,
    ConfigValidationError,
)
from filedrawer.config.loader import (
    clear_config_cache,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
    validate_config,
)
from filedrawer.config.logging_factory import build_logging_config
from filedrawer.config.models import (
    FileDrawerConfig,
    InputConfig,
    LoggingConfig,
    Profile,
)
from filedrawer.config.profiles import (
    ProfileError,
    ProfileNotFoundError,
    list_profiles,
    load_profile,
    merge_profile_with_config,
)

__all__ = [
    # Models
    "FileDrawerConfig",
    "InputConfig",
    "LoggingConfig",
    "Profile",
    # Errors
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    "ProfileError",
    "ProfileNotFoundError",
    # Loader
    "clear_config_cache",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
    "validate_config",
    # Building blocks
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
    # Profiles
    "list_profiles",
    "load_profile",
    "merge_profile_with_config",
]
