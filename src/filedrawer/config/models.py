"""Configuration data models.

This module defines dataclasses for filedrawer configuration options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from filedrawer.feature_flags import DEFAULT_FEATURES
from filedrawer.input.filename import FilenameSchema
from filedrawer.input.models import normalize_extensions, resolve_timezone
from filedrawer.input.partitions import PartitionScheme
from filedrawer.logging.levels import LEVEL_MAP


@dataclass
class InputConfig:
    """Configuration for input traversal.

    The scanners read this structure and never modify it.
    """

    # Directory to read input files from (None = not configured)
    input_directory: Path | None = None

    # Descend into subdirectories (unstructured input only)
    recursive: bool = False

    # Extension allow-list without leading dots (empty = any)
    extensions: list[str] = field(default_factory=list)

    # Maximum simultaneous handler invocations
    concurrency: int | None = 1

    # Maximum number of files handed to the handler (None = no cap)
    limit: int | None = None

    # IANA timezone for partition boundaries and encoded dates
    timezone: str = "Etc/UTC"

    # Date hierarchy of structured input
    input_structure: PartitionScheme = PartitionScheme.NONE

    # Components encoded in structured filenames: date, time, subject
    input_filename_options: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate configuration."""
        if isinstance(self.input_directory, str):
            self.input_directory = Path(self.input_directory).expanduser()
        self.extensions = normalize_extensions(self.extensions)
        self.input_structure = PartitionScheme.from_value(self.input_structure)
        # Raises ValueError for unknown options
        FilenameSchema.from_options(self.input_filename_options)
        if self.concurrency is not None and self.concurrency < 1:
            raise ValueError(
                f"concurrency must be at least 1, got {self.concurrency}"
            )
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}")
        resolve_timezone(self.timezone)

    @property
    def filename_schema(self) -> FilenameSchema:
        return FilenameSchema.from_options(self.input_filename_options)

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for display and JSON output."""
        return {
            "input_directory": (
                str(self.input_directory) if self.input_directory else None
            ),
            "recursive": self.recursive,
            "extensions": list(self.extensions),
            "concurrency": self.concurrency,
            "limit": self.limit,
            "timezone": self.timezone,
            "input_structure": self.input_structure.value,
            "input_filename_options": [
                c.value for c in self.filename_schema.components
            ],
        }


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: silly, debug, verbose, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.lower() not in LEVEL_MAP:
            raise ValueError(
                f"level must be one of {sorted(LEVEL_MAP)}, got {self.level}"
            )
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {sorted(valid_formats)}, got {self.format}"
            )
        if self.max_bytes < 0:
            raise ValueError(f"max_bytes must be non-negative, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must be non-negative, got {self.backup_count}"
            )


@dataclass(frozen=True)
class Profile:
    """Named configuration profile.

    Profiles store settings for a particular input source (a mail archive,
    a log drop, ...) and are applied with the --profile flag. Input settings
    are partial: only the keys present override the base configuration.
    """

    name: str
    description: str | None = None
    input: dict[str, Any] | None = None
    logging: LoggingConfig | None = None
    features: frozenset[str] | None = None


@dataclass
class FileDrawerConfig:
    """Main configuration container for filedrawer."""

    input: InputConfig = field(default_factory=InputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    features: frozenset[str] = DEFAULT_FEATURES
