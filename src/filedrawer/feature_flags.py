"""Feature flags that select how input is traversed.

The enabled feature set decides whether input processing runs at all
(``input``) and whether the input directory is read as date partitions
(``structured-input``). Flags come from the ``[features]`` section of the
config file and can be overridden per run with environment variables of the
form FILEDRAWER_FEATURE_{FLAG_NAME}: "1" enables the flag and "0" disables
it. Any other value leaves the configured state unchanged.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from enum import Enum

logger = logging.getLogger(__name__)

ENV_PREFIX = "FILEDRAWER_FEATURE_"


class Feature(str, Enum):
    """Known feature flags."""

    INPUT = "input"
    STRUCTURED_INPUT = "structured-input"

    @property
    def env_var(self) -> str:
        """Environment variable controlling this flag."""
        return ENV_PREFIX + self.value.upper().replace("-", "_")


# Registry of known flags and what they do (for documentation and logging).
_KNOWN_FLAGS: dict[Feature, str] = {
    Feature.INPUT: "Process files from the input directory",
    Feature.STRUCTURED_INPUT: "Read the input directory as date partitions",
}

DEFAULT_FEATURES: frozenset[str] = frozenset({Feature.INPUT.value})


def parse_feature(name: str) -> Feature:
    """Parse a flag name, accepting "structured_input" as well.

    Raises:
        ValueError: If the name is not a known flag.
    """
    normalized = name.strip().lower().replace("_", "-")
    try:
        return Feature(normalized)
    except ValueError:
        valid = ", ".join(f.value for f in Feature)
        raise ValueError(
            f"Unknown feature {name!r}. Valid features: {valid}"
        ) from None


def resolve_features(
    configured: Iterable[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> frozenset[str]:
    """Compute the enabled feature set.

    Args:
        configured: Feature names from configuration. None means
            DEFAULT_FEATURES.
        env: Environment mapping (defaults to os.environ).

    Returns:
        Names of enabled features.

    Raises:
        ValueError: If a configured name is not a known flag.
    """
    env = os.environ if env is None else env
    source = DEFAULT_FEATURES if configured is None else configured
    enabled = {parse_feature(name).value for name in source}

    for feature in Feature:
        value = env.get(feature.env_var)
        if value == "1":
            enabled.add(feature.value)
        elif value == "0":
            enabled.discard(feature.value)

    return frozenset(enabled)


def is_enabled(
    feature: Feature | str,
    features: Iterable[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> bool:
    """Check whether a feature is enabled.

    Args:
        feature: Flag to check (Feature or name). Case-insensitive.
        features: Configured feature names; see resolve_features.
        env: Environment mapping (defaults to os.environ).

    Returns:
        True if the flag is enabled.
    """
    flag = feature if isinstance(feature, Feature) else parse_feature(feature)
    return flag.value in resolve_features(features, env)


def log_enabled_flags(features: Iterable[str]) -> None:
    """Log the enabled feature flags at INFO level.

    Logs nothing when no known flag is enabled.
    """
    active = set(features)
    enabled = [f.value for f in _KNOWN_FLAGS if f.value in active]
    if enabled:
        logger.info("Enabled feature flags: %s", ", ".join(enabled))
