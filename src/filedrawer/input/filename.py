"""Filename schema for structured input.

Structured input files are named ``[<date>-][<time>-]<subject>.<ext>``.
Which components are present is configured by the filename options. The
date portion only carries what the partition directories do not:

==========  ==============  =======================
scheme      directory       date portion of name
==========  ==============  =======================
none        (input root)    ``YYYY-MM-DD``
year        ``YYYY``        ``MM-DD``
month       ``YYYY/MM``     ``DD``
day         ``YYYY/MM/DD``  (absent)
==========  ==============  =======================

The time portion is ``HHMM``. For example, with the ``month`` scheme and
options ``date, time, subject`` a file is stored as
``2024/01/15-0930-standup.eml``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from zoneinfo import ZoneInfo

from filedrawer.input.models import resolve_timezone
from filedrawer.input.partitions import PartitionScheme
from filedrawer.input.patterns import extension_suffix

_DIGIT = "[0-9]"

_DATE_FORMATS = {
    PartitionScheme.NONE: "%Y-%m-%d",
    PartitionScheme.YEAR: "%m-%d",
    PartitionScheme.MONTH: "%d",
}

_DATE_REGEX = {
    PartitionScheme.NONE: r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})",
    PartitionScheme.YEAR: r"(?P<month>\d{2})-(?P<day>\d{2})",
    PartitionScheme.MONTH: r"(?P<day>\d{2})",
}

_TIME_REGEX = r"(?P<hour>\d{2})(?P<minute>\d{2})"

_DIRECTORY_FIELDS = ("year", "month", "day")


class FilenameComponent(Enum):
    """Semantic components that can appear in a structured filename."""

    DATE = "date"
    TIME = "time"
    SUBJECT = "subject"


def _digits(fmt: str) -> str:
    # "%Y-%m-%d" -> "[0-9][0-9][0-9][0-9]-[0-9][0-9]-[0-9][0-9]"
    widths = {"%Y": 4, "%m": 2, "%d": 2, "%H": 2, "%M": 2}
    out = fmt
    for directive, width in widths.items():
        out = out.replace(directive, _DIGIT * width)
    return out


@dataclass(frozen=True)
class FilenameSchema:
    """Ordered set of components encoded in structured filenames."""

    components: tuple[FilenameComponent, ...] = ()

    @classmethod
    def from_options(cls, options: Iterable[str | FilenameComponent]) -> FilenameSchema:
        """Build a schema from configured option names.

        Components are kept in canonical filename order (date, time,
        subject) whatever order the options are given in.

        Raises:
            ValueError: If an option is not a known component.
        """
        present: set[FilenameComponent] = set()
        for option in options:
            if isinstance(option, FilenameComponent):
                present.add(option)
                continue
            try:
                present.add(FilenameComponent(option.strip().lower()))
            except ValueError:
                valid = ", ".join(c.value for c in FilenameComponent)
                raise ValueError(
                    f"Unknown filename option {option!r}. Valid options: {valid}"
                ) from None
        return cls(tuple(c for c in FilenameComponent if c in present))

    def has(self, component: FilenameComponent) -> bool:
        return component in self.components

    def validate_for(self, scheme: PartitionScheme) -> None:
        """Check that file dates are fully recoverable under ``scheme``.

        Raises:
            ValueError: If the time is encoded but the day it belongs to is
                not, or if neither directories nor names carry a date.
        """
        has_date = self.has(FilenameComponent.DATE) and scheme is not PartitionScheme.DAY
        if self.has(FilenameComponent.TIME) and not (
            has_date or scheme is PartitionScheme.DAY
        ):
            raise ValueError(
                f"Filename option 'time' requires option 'date' "
                f"with input structure {scheme.value!r}"
            )
        if scheme is PartitionScheme.NONE and not self.has(FilenameComponent.DATE):
            raise ValueError(
                "Input structure 'none' requires filename option 'date'"
            )

    def glob_fragment(
        self,
        component: FilenameComponent,
        scheme: PartitionScheme,
        value: date | datetime | str | None = None,
    ) -> str:
        """Glob fragment matching one component of a filename.

        Args:
            component: Component to match.
            scheme: Partition scheme; decides the date portion's shape.
            value: Literal value to match. Without one, the fragment matches
                any well-formed value.

        Returns:
            Fragment without separators; "" when the component carries
            nothing under ``scheme`` (the date under the day scheme).

        Raises:
            TypeError: If ``value`` is not a date for DATE or not a datetime
                for TIME.
        """
        if component is FilenameComponent.DATE:
            fmt = _DATE_FORMATS.get(scheme)
            if fmt is None:
                return ""
            if value is None:
                return _digits(fmt)
            if not isinstance(value, date):
                raise TypeError(
                    f"Date fragment needs a date, got {type(value).__name__}"
                )
            return value.strftime(fmt)
        if component is FilenameComponent.TIME:
            if value is None:
                return _digits("%H%M")
            if not isinstance(value, datetime):
                raise TypeError(
                    f"Time fragment needs a datetime, got {type(value).__name__}"
                )
            return value.strftime("%H%M")
        return "*" if value is None else str(value)

    def leaf_pattern(
        self,
        scheme: PartitionScheme,
        extensions: Sequence[str],
        day: date | None = None,
    ) -> str:
        """Glob matching file names inside one partition directory.

        Args:
            scheme: Partition scheme.
            extensions: Bare extensions; empty accepts any extension.
            day: When given, the date portion is narrowed to this day.

        Example:
            >>> FilenameSchema.from_options(["date", "subject"]).leaf_pattern(
            ...     PartitionScheme.MONTH, ["eml"])
            '[0-9][0-9]-*.{eml}'
        """
        fragments: list[str] = []
        if self.has(FilenameComponent.DATE):
            fragment = self.glob_fragment(FilenameComponent.DATE, scheme, day)
            if fragment:
                fragments.append(fragment)
        if self.has(FilenameComponent.TIME):
            fragments.append(self.glob_fragment(FilenameComponent.TIME, scheme))
        if self.has(FilenameComponent.SUBJECT) or not fragments:
            fragments.append("*")
        return "-".join(fragments) + extension_suffix(extensions)

    def resolution(self, scheme: PartitionScheme) -> timedelta | None:
        """Span of time a single file's encoded date stands for.

        Returns None when file names carry nothing finer than the partition
        directory, in which case the partition check alone decides.
        """
        if self.has(FilenameComponent.TIME):
            return timedelta(minutes=1)
        if self.has(FilenameComponent.DATE) and scheme is not PartitionScheme.DAY:
            return timedelta(days=1)
        return None

    def encodes_datetime(self, scheme: PartitionScheme) -> bool:
        """Whether names carry a date finer than their partition."""
        return self.resolution(scheme) is not None

    def _name_regex(self, scheme: PartitionScheme) -> re.Pattern[str]:
        parts: list[str] = []
        if self.has(FilenameComponent.DATE) and scheme in _DATE_REGEX:
            parts.append(_DATE_REGEX[scheme])
        if self.has(FilenameComponent.TIME):
            parts.append(_TIME_REGEX)
        if not parts:
            return re.compile("")
        return re.compile("^" + "-".join(parts) + r"(?=[-.]|$)")

    def extract_date(
        self,
        scheme: PartitionScheme,
        relative_path: str,
        tz: str | ZoneInfo,
    ) -> datetime | None:
        """Recover the local date of a file from its path.

        Year, month and day come from the partition directories first and
        from the file name for whatever the directories do not carry. Fields
        carried by neither default to the start of the partition.

        Args:
            scheme: Partition scheme.
            relative_path: Path relative to the input root.
            tz: Timezone the encoded wall-clock values are in.

        Returns:
            Aware datetime in ``tz``, or None if the path does not follow
            the schema.
        """
        zone = tz if isinstance(tz, ZoneInfo) else resolve_timezone(tz)
        parts = [part for part in relative_path.split("/") if part]
        if len(parts) < scheme.depth + 1:
            return None

        fields: dict[str, int] = {}
        for name, part in zip(_DIRECTORY_FIELDS, parts[: scheme.depth]):
            if not part.isdigit():
                return None
            fields[name] = int(part)

        match = self._name_regex(scheme).match(parts[-1])
        if match is None:
            return None
        for name, value in match.groupdict().items():
            fields.setdefault(name, int(value))

        if "year" not in fields:
            return None
        try:
            return datetime.combine(
                date(fields["year"], fields.get("month", 1), fields.get("day", 1)),
                time(fields.get("hour", 0), fields.get("minute", 0)),
                tzinfo=zone,
            )
        except ValueError:
            return None
