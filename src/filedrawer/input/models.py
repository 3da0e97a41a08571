"""Data models for input traversal.

These are value objects passed between the dispatcher, the scanners and the
enumerator. None of them are persisted; each traversal call builds its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_UTC = timezone.utc


def normalize_extensions(extensions: list[str] | tuple[str, ...] | None) -> list[str]:
    """Normalize an extension allow-list.

    Leading dots and surrounding whitespace are stripped and empty entries
    dropped. Order is preserved and the first occurrence of a duplicate wins.

    Args:
        extensions: Raw extension strings (e.g. [".eml", "msg"]).

    Returns:
        Bare extension strings in the order supplied.
    """
    normalized: list[str] = []
    for ext in extensions or []:
        bare = ext.strip().lstrip(".")
        if bare and bare not in normalized:
            normalized.append(bare)
    return normalized


def resolve_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA timezone name.

    Raises:
        ValueError: If the name is not a known timezone.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name!r}") from e


@dataclass(frozen=True)
class TraversalRequest:
    """Options for a single unstructured traversal."""

    root_directory: str
    recursive: bool = False
    extensions: tuple[str, ...] = ()
    limit: int | None = None
    concurrency: int = 1

    def __post_init__(self) -> None:
        """Validate the request."""
        if not self.root_directory:
            raise ValueError("root_directory must not be empty")
        if self.concurrency < 1:
            raise ValueError(
                f"concurrency must be at least 1, got {self.concurrency}"
            )
        if self.limit is not None and self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}")


@dataclass(frozen=True)
class DateWindow:
    """Inclusive [start, end] range interpreted in a timezone.

    Naive bounds are taken to be wall-clock times in ``timezone``.
    """

    start: datetime
    end: datetime
    timezone: str = "Etc/UTC"
    zone: ZoneInfo = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Attach tzinfo to naive bounds and validate ordering."""
        zone = resolve_timezone(self.timezone)
        object.__setattr__(self, "zone", zone)
        if self.start.tzinfo is None:
            object.__setattr__(self, "start", self.start.replace(tzinfo=zone))
        if self.end.tzinfo is None:
            object.__setattr__(self, "end", self.end.replace(tzinfo=zone))
        if self.start_utc > self.end_utc:
            raise ValueError(
                f"Window start {self.start.isoformat()} is after "
                f"end {self.end.isoformat()}"
            )

    @property
    def start_utc(self) -> datetime:
        return self.start.astimezone(_UTC)

    @property
    def end_utc(self) -> datetime:
        return self.end.astimezone(_UTC)

    def contains(self, instant: datetime) -> bool:
        """Check whether an instant lies inside the window (inclusive)."""
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=self.zone)
        value = instant.astimezone(_UTC)
        return self.start_utc <= value <= self.end_utc


class OutcomeStatus(Enum):
    """Result of visiting a single file."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"  # Outside the date window; handler not invoked


@dataclass(frozen=True)
class VisitOutcome:
    """Outcome of visiting one discovered file."""

    path: str
    status: OutcomeStatus
    reason: BaseException | None = None

    @classmethod
    def succeeded(cls, path: str) -> VisitOutcome:
        return cls(path, OutcomeStatus.SUCCEEDED)

    @classmethod
    def failed(cls, path: str, reason: BaseException) -> VisitOutcome:
        return cls(path, OutcomeStatus.FAILED, reason)

    @classmethod
    def skipped(cls, path: str) -> VisitOutcome:
        return cls(path, OutcomeStatus.SKIPPED)
