"""Configuration profile management.

Profiles store named settings for different input sources (a mail archive,
a dated log drop, ...) and are applied with the --profile flag. They live in
``<data dir>/profiles/<name>.yaml``:

    description: Daily mail export
    input:
      input_directory: ~/exports/mail
      input_structure: day
      extensions: [eml]
    logging:
      level: verbose
    features: [input, structured-input]
"""

from __future__ import annotations

import re
from dataclasses import fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from filedrawer.feature_flags import parse_feature

if TYPE_CHECKING:
    from filedrawer.config.models import FileDrawerConfig, Profile


class ProfileError(Exception):
    """Error loading or validating a profile."""


class ProfileNotFoundError(ProfileError):
    """Profile does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Profile not found: {name}")


def _validate_and_construct(
    section_name: str,
    dataclass_type: type,
    data: Any,
    profile_name: str,
) -> Any:
    """Construct a dataclass, rejecting unknown keys.

    Raises:
        ProfileError: If the section is not a mapping, has unknown keys, or
            fails the dataclass's own validation.
    """
    if not isinstance(data, dict):
        raise ProfileError(
            f"'{section_name}' section of profile '{profile_name}' must be a mapping"
        )
    expected_fields = {f.name for f in fields(dataclass_type) if f.init}
    unknown_keys = set(data.keys()) - expected_fields

    if unknown_keys:
        raise ProfileError(
            f"Unknown keys in '{section_name}' section of profile '{profile_name}': "
            f"{sorted(unknown_keys)}. Valid keys are: {sorted(expected_fields)}"
        )

    try:
        return dataclass_type(**data)
    except (TypeError, ValueError) as e:
        raise ProfileError(
            f"Invalid '{section_name}' configuration in profile '{profile_name}': {e}"
        ) from e


def get_profiles_directory() -> Path:
    """Get the profiles directory path (``<data dir>/profiles``)."""
    from filedrawer.config.loader import get_data_dir

    return get_data_dir() / "profiles"


def list_profiles() -> list[str]:
    """List available profile names, sorted.

    Returns:
        Profile names (without .yaml extension).
    """
    profiles_dir = get_profiles_directory()
    if not profiles_dir.exists():
        return []

    return sorted(
        p.stem
        for p in profiles_dir.glob("*.yaml")
        if p.is_file() and not p.name.startswith(".")
    )


def load_profile(name: str) -> Profile:
    """Load a profile by name.

    Args:
        name: Profile name (without .yaml extension).

    Returns:
        Loaded Profile dataclass.

    Raises:
        ProfileNotFoundError: If profile doesn't exist.
        ProfileError: If profile is invalid.
    """
    from filedrawer.config.models import InputConfig, LoggingConfig, Profile

    if not re.match(r"^[a-zA-Z0-9_-]+$", name):
        raise ProfileError(f"Profile name must be alphanumeric (with - or _): {name}")

    profile_path = get_profiles_directory() / f"{name}.yaml"
    if not profile_path.exists():
        raise ProfileNotFoundError(name)

    try:
        with open(profile_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ProfileError(f"Invalid YAML in profile {name}: {e}") from e

    if not isinstance(data, dict):
        raise ProfileError(f"Profile {name} must be a YAML mapping")

    input_overrides: dict[str, Any] | None = None
    if "input" in data:
        # Validate against a full InputConfig, keep only the keys given
        _validate_and_construct("input", InputConfig, data["input"], name)
        input_overrides = dict(data["input"])
        if input_overrides.get("input_directory"):
            input_overrides["input_directory"] = Path(
                input_overrides["input_directory"]
            ).expanduser()

    logging_config: LoggingConfig | None = None
    if "logging" in data:
        logging_data = dict(data["logging"] or {})
        if logging_data.get("file"):
            logging_data["file"] = Path(logging_data["file"]).expanduser()
        logging_config = _validate_and_construct(
            "logging", LoggingConfig, logging_data, name
        )

    features: frozenset[str] | None = None
    if "features" in data:
        try:
            features = frozenset(
                parse_feature(feature).value for feature in data["features"] or []
            )
        except (TypeError, ValueError) as e:
            raise ProfileError(f"Invalid features in profile {name}: {e}") from e

    return Profile(
        name=data.get("name", name),
        description=data.get("description"),
        input=input_overrides,
        logging=logging_config,
        features=features,
    )


def merge_profile_with_config(
    profile: Profile, config: FileDrawerConfig
) -> FileDrawerConfig:
    """Merge profile settings into a base config.

    Profile settings override the base config; CLI flags (applied later)
    override the profile. Input settings are merged key by key, logging and
    features replace the base section.

    Args:
        profile: Profile to apply.
        config: Base configuration.

    Returns:
        New FileDrawerConfig with profile settings merged in.
    """
    overrides: dict[str, Any] = {}

    if profile.input:
        overrides["input"] = replace(config.input, **profile.input)
    if profile.logging:
        overrides["logging"] = profile.logging
    if profile.features is not None:
        overrides["features"] = profile.features

    return replace(config, **overrides)
