"""Pydantic models for the config file.

The parsed ``config.toml`` dictionary is validated against ConfigFileModel
before it is turned into a ConfigSource. Unknown keys are rejected so typos
surface instead of being silently ignored.

Example config.toml:

    [input]
    input_directory = "~/mail/archive"
    extensions = ["eml", "msg"]
    concurrency = 4
    timezone = "America/New_York"
    input_structure = "month"
    input_filename_options = ["date", "time", "subject"]

    [logging]
    level = "verbose"
    file = "~/.filedrawer/logs/filedrawer.log"

    [features]
    enabled = ["input", "structured-input"]
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from filedrawer.config.exceptions import ConfigValidationError
from filedrawer.feature_flags import parse_feature
from filedrawer.input.filename import FilenameComponent
from filedrawer.input.models import normalize_extensions, resolve_timezone
from filedrawer.logging.levels import LEVEL_MAP


class InputSectionModel(BaseModel):
    """Pydantic model for the [input] section."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input_directory: str | None = None
    recursive: bool | None = None
    extensions: list[str] | None = None
    concurrency: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)
    timezone: str | None = None
    input_structure: Literal["none", "year", "month", "day"] | None = None
    input_filename_options: list[str] | None = None

    @field_validator("extensions")
    @classmethod
    def normalize_extension_list(cls, v: list[str] | None) -> list[str] | None:
        """Strip leading dots from extensions."""
        if v is None:
            return None
        return normalize_extensions(v)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """Reject timezone names zoneinfo does not know."""
        if v is not None:
            resolve_timezone(v)
        return v

    @field_validator("input_filename_options")
    @classmethod
    def validate_filename_options(cls, v: list[str] | None) -> list[str] | None:
        """Casefold option names and reject unknown ones."""
        if v is None:
            return None
        valid = {c.value for c in FilenameComponent}
        options = [option.casefold() for option in v]
        unknown = [option for option in options if option not in valid]
        if unknown:
            raise ValueError(
                f"unknown filename options {unknown}; valid options are "
                f"{sorted(valid)}"
            )
        return options


class LoggingSectionModel(BaseModel):
    """Pydantic model for the [logging] section."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str | None = None
    file: str | None = None
    format: Literal["text", "json"] | None = None
    include_stderr: bool | None = None
    max_bytes: int | None = Field(default=None, ge=0)
    backup_count: int | None = Field(default=None, ge=0)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str | None) -> str | None:
        """Casefold and check the level name."""
        if v is None:
            return None
        level = v.casefold()
        if level not in LEVEL_MAP:
            raise ValueError(f"level must be one of {sorted(LEVEL_MAP)}")
        return level


class FeaturesSectionModel(BaseModel):
    """Pydantic model for the [features] section."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: list[str] | None = None

    @field_validator("enabled")
    @classmethod
    def validate_features(cls, v: list[str] | None) -> list[str] | None:
        """Normalize feature names ("structured_input" -> "structured-input")."""
        if v is None:
            return None
        return [parse_feature(name).value for name in v]


class ConfigFileModel(BaseModel):
    """Pydantic model for the whole config file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input: InputSectionModel = Field(default_factory=InputSectionModel)
    logging: LoggingSectionModel = Field(default_factory=LoggingSectionModel)
    features: FeaturesSectionModel = Field(default_factory=FeaturesSectionModel)


def _format_validation_error(error: ValidationError) -> tuple[str, str | None]:
    errors = error.errors()
    if not errors:
        return f"Config validation failed: {error}", None
    first_error = errors[0]
    loc = ".".join(str(x) for x in first_error.get("loc", []))
    msg = first_error.get("msg", str(error))
    if loc:
        return f"Config validation failed: {loc}: {msg}", loc
    return f"Config validation failed: {msg}", None


def validate_config_file(data: dict[str, Any]) -> ConfigFileModel:
    """Validate a parsed config file.

    Args:
        data: Dictionary parsed from config.toml.

    Returns:
        Validated ConfigFileModel.

    Raises:
        ConfigValidationError: With the first offending key and reason.
    """
    try:
        return ConfigFileModel.model_validate(data)
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise ConfigValidationError(message, field) from e
