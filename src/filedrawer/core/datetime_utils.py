"""Datetime utilities for date windows.

Window bounds are given on the command line as ISO-8601 timestamps, bare
dates, or relative offsets such as "7d". Values without an offset are
wall-clock times in the configured timezone, not UTC.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

# Supported time unit suffixes and their timedelta keyword arguments
_TIME_UNIT_MAP: dict[str, str] = {
    "d": "days",
    "w": "weeks",
    "h": "hours",
    "m": "minutes",
}

_RELATIVE_RE = re.compile(r"^(\d+)([dwhmDWHM])$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_timestamp(timestamp: str, tz: ZoneInfo) -> datetime:
    """Parse an ISO-8601 timestamp, handling both Z and +00:00 suffixes.

    Args:
        timestamp: ISO-8601 timestamp string (e.g., "2024-01-15T10:30:00Z").
        tz: Zone for timestamps without an offset.

    Returns:
        Timezone-aware datetime.
    """
    normalized = timestamp.strip().replace("Z", "+00:00")
    dt = datetime.fromisoformat(normalized)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt


def parse_relative_time(value: str, now: datetime | None = None) -> datetime:
    """Parse a relative time string ("1d", "2w", "3h", "30m").

    Args:
        value: Relative time string (case-insensitive).
        now: Reference instant (defaults to the current UTC time).

    Returns:
        Aware datetime for ``now`` minus the duration.

    Raises:
        ValueError: If the format is invalid.
    """
    match = _RELATIVE_RE.match(value.strip())
    if not match:
        units = ", ".join(f"{k} ({_TIME_UNIT_MAP[k]})" for k in _TIME_UNIT_MAP)
        raise ValueError(
            f"Invalid relative time format '{value}'. "
            f"Expected format: <number><unit> where unit is one of: {units}"
        )
    amount = int(match.group(1))
    unit = match.group(2).lower()
    delta = timedelta(**{_TIME_UNIT_MAP[unit]: amount})
    return (now or datetime.now(timezone.utc)) - delta


def parse_window_bound(
    value: str,
    tz: ZoneInfo,
    *,
    end: bool = False,
    now: datetime | None = None,
) -> datetime:
    """Parse one bound of a date window.

    Accepted forms:
        - "2024-01-15": the start of that local day, or its last
          microsecond when ``end`` is True
        - "2024-01-15T09:30", "2024-01-15T09:30:00+02:00", "...Z"
        - "7d", "12h", ...: relative to ``now``

    Args:
        value: Bound as typed by the user.
        tz: Timezone for values without an offset.
        end: Whether this is the inclusive upper bound.
        now: Reference instant for relative values.

    Returns:
        Timezone-aware datetime.

    Raises:
        ValueError: If the value matches none of the accepted forms.
    """
    text = value.strip()
    if _RELATIVE_RE.match(text):
        return parse_relative_time(text, now)
    if _DATE_RE.match(text):
        day = date.fromisoformat(text)
        if end:
            return datetime.combine(day, time.max, tzinfo=tz)
        return datetime.combine(day, time.min, tzinfo=tz)
    try:
        return parse_iso_timestamp(text, tz)
    except ValueError:
        raise ValueError(
            f"Invalid date '{value}'. Expected YYYY-MM-DD, an ISO-8601 "
            "timestamp, or a relative time such as '7d'"
        ) from None
