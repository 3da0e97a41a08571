"""Date partitions for structured input.

Structured input directories are laid out as a date hierarchy below the
input root: ``YYYY`` for yearly partitions, ``YYYY/MM`` for monthly and
``YYYY/MM/DD`` for daily. Partition boundaries are local midnights in the
configured timezone, so an instant's partition depends on that timezone and
not on its UTC calendar date.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from zoneinfo import ZoneInfo

from filedrawer.input.models import resolve_timezone

_UTC = timezone.utc


class PartitionScheme(Enum):
    """Granularity of the date directory hierarchy."""

    NONE = "none"
    YEAR = "year"
    MONTH = "month"
    DAY = "day"

    @classmethod
    def from_value(cls, value: str | PartitionScheme | None) -> PartitionScheme:
        """Parse a scheme identifier, treating None and "" as NONE.

        Raises:
            ValueError: If the identifier is not a known scheme.
        """
        if isinstance(value, PartitionScheme):
            return value
        if not value:
            return cls.NONE
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(
                f"Unknown input structure {value!r}. Valid values: {valid}"
            ) from None

    @property
    def depth(self) -> int:
        """Number of directory levels the scheme adds below the root."""
        return {"none": 0, "year": 1, "month": 2, "day": 3}[self.value]


@dataclass(frozen=True)
class Partition:
    """One partition directory and the local time range it covers.

    ``start`` is inclusive and ``end`` exclusive. Both are None for the
    single unbounded partition of the NONE scheme.
    """

    directory: str
    start: datetime | None = None
    end: datetime | None = None

    def intersects(self, start: datetime, end: datetime) -> bool:
        """Check whether the partition overlaps the inclusive [start, end]."""
        if self.start is None or self.end is None:
            return True
        return (
            self.start.astimezone(_UTC) <= end.astimezone(_UTC)
            and self.end.astimezone(_UTC) > start.astimezone(_UTC)
        )


def partition_directory(scheme: PartitionScheme, day: date) -> str:
    """Relative directory of the partition containing ``day``."""
    if scheme is PartitionScheme.YEAR:
        return f"{day.year:04d}"
    if scheme is PartitionScheme.MONTH:
        return f"{day.year:04d}/{day.month:02d}"
    if scheme is PartitionScheme.DAY:
        return f"{day.year:04d}/{day.month:02d}/{day.day:02d}"
    return ""


def _floor(scheme: PartitionScheme, day: date) -> date:
    if scheme is PartitionScheme.YEAR:
        return date(day.year, 1, 1)
    if scheme is PartitionScheme.MONTH:
        return date(day.year, day.month, 1)
    return day


def _next(scheme: PartitionScheme, day: date) -> date:
    if scheme is PartitionScheme.YEAR:
        return date(day.year + 1, 1, 1)
    if scheme is PartitionScheme.MONTH:
        if day.month == 12:
            return date(day.year + 1, 1, 1)
        return date(day.year, day.month + 1, 1)
    return day + timedelta(days=1)


def local_midnight(day: date, zone: ZoneInfo) -> datetime:
    """Aware datetime for the start of ``day`` in ``zone``."""
    return datetime(day.year, day.month, day.day, tzinfo=zone)


def partitions_for_window(
    scheme: PartitionScheme,
    start: datetime,
    end: datetime,
    tz: str | ZoneInfo,
) -> list[Partition]:
    """List the partitions overlapping an inclusive window, oldest first.

    Args:
        scheme: Partition granularity.
        start: Window start (aware; naive values are read as local time).
        end: Window end, inclusive.
        tz: IANA timezone name or ZoneInfo used for partition boundaries.

    Returns:
        Partitions in chronological order; empty when ``start > end``.
        The NONE scheme always yields a single unbounded partition.
    """
    zone = tz if isinstance(tz, ZoneInfo) else resolve_timezone(tz)
    if start.tzinfo is None:
        start = start.replace(tzinfo=zone)
    if end.tzinfo is None:
        end = end.replace(tzinfo=zone)
    if start.astimezone(_UTC) > end.astimezone(_UTC):
        return []

    if scheme is PartitionScheme.NONE:
        return [Partition(directory="")]

    first = _floor(scheme, start.astimezone(zone).date())
    last = end.astimezone(zone).date()

    partitions: list[Partition] = []
    current = first
    while current <= last:
        following = _next(scheme, current)
        partition = Partition(
            directory=partition_directory(scheme, current),
            start=local_midnight(current, zone),
            end=local_midnight(following, zone),
        )
        if partition.intersects(start, end):
            partitions.append(partition)
        current = following
    return partitions
