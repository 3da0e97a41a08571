"""Structured input traversal.

Structured input is stored in date partitions below the input root (see
filedrawer.input.partitions) with names following a filename schema (see
filedrawer.input.filename). A traversal visits only the partitions that
overlap the requested window, oldest first, and then checks each file's own
encoded date against the window before handing it to the handler.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, timezone

from filedrawer.input.enumerator import FilesystemEnumerator
from filedrawer.input.filename import FilenameComponent, FilenameSchema
from filedrawer.input.interfaces import Enumerator, FileHandler, InputLogger
from filedrawer.input.models import DateWindow, VisitOutcome, resolve_timezone
from filedrawer.input.partitions import (
    Partition,
    PartitionScheme,
    partitions_for_window,
)
from filedrawer.input.tally import OutcomeTally, invoke_handler

_UTC = timezone.utc
_EPSILON = timedelta(microseconds=1)


def single_day(partition: Partition, window: DateWindow) -> date | None:
    """Local day covered by the window within a partition, if only one.

    Returns:
        The day when the part of the window that falls inside the partition
        starts and ends on the same local date, otherwise None.
    """
    lo = window.start_utc
    hi = window.end_utc
    if partition.start is not None:
        lo = max(lo, partition.start.astimezone(_UTC))
    if partition.end is not None:
        hi = min(hi, partition.end.astimezone(_UTC) - _EPSILON)
    first = lo.astimezone(window.zone).date()
    last = hi.astimezone(window.zone).date()
    return first if first == last else None


def partition_pattern(
    partition: Partition,
    scheme: PartitionScheme,
    schema: FilenameSchema,
    extensions: Sequence[str],
    window: DateWindow,
) -> str:
    """Glob for the files of one partition, relative to the input root."""
    day = None
    if schema.has(FilenameComponent.DATE):
        day = single_day(partition, window)
    leaf = schema.leaf_pattern(scheme, extensions, day)
    if partition.directory:
        return f"{partition.directory}/{leaf}"
    return leaf


async def process(
    partition_scheme: PartitionScheme | str,
    filename_schema: FilenameSchema | Iterable[str],
    extensions: Sequence[str],
    tz: str,
    start: datetime,
    end: datetime,
    limit: int | None,
    features: Iterable[str],
    logger: InputLogger,
    root_directory: str,
    handler: FileHandler,
    concurrency: int | None = None,
    *,
    enumerator: Enumerator | None = None,
) -> int:
    """Run the handler on every file dated inside [start, end].

    ``limit`` caps the number of files handed to the handler across all
    partitions of the call. Files whose encoded date falls outside the
    window are skipped and never reach the handler.

    Args:
        partition_scheme: Directory hierarchy of the input root.
        filename_schema: Schema, or filename option names.
        extensions: Bare extensions to accept; empty accepts any.
        tz: IANA timezone of partition boundaries and encoded dates.
        start: Window start (naive values are local to ``tz``).
        end: Window end, inclusive.
        limit: Maximum number of files to hand to the handler.
        features: Enabled feature names; passed through from the caller.
        logger: Six-level logger.
        root_directory: Input root containing the partitions.
        handler: Called as ``handler(path, date)`` with the path relative to
            ``root_directory`` and the file's local date.
        concurrency: Maximum simultaneous handler invocations.
        enumerator: Filesystem enumerator; defaults to FilesystemEnumerator.

    Returns:
        Number of files whose handler completed without raising.

    Raises:
        ValueError: If the scheme, filename options or timezone are invalid.
    """
    enumerator = enumerator or FilesystemEnumerator()
    scheme = PartitionScheme.from_value(partition_scheme)
    if isinstance(filename_schema, FilenameSchema):
        schema = filename_schema
    else:
        schema = FilenameSchema.from_options(filename_schema)
    schema.validate_for(scheme)
    zone = resolve_timezone(tz)
    fine_check = schema.encodes_datetime(scheme)
    workers = concurrency or 1

    partitions = partitions_for_window(scheme, start, end, zone)
    logger.info(
        "Processing structured files in %s from %s to %s across %d partitions",
        root_directory,
        start.isoformat(),
        end.isoformat(),
        len(partitions),
    )
    if not partitions:
        return 0
    window = DateWindow(start, end, timezone=tz)
    logger.silly("Enabled features: %s", ",".join(sorted(features)))
    if extensions:
        logger.debug("Applying extension filter: %s", ",".join(extensions))

    submitted = 0

    async with OutcomeTally() as tally:

        async def visit(path: str) -> None:
            nonlocal submitted
            file_date = schema.extract_date(scheme, path, window.zone)
            if fine_check and (file_date is None or not window.contains(file_date)):
                logger.silly("Skipping file %s outside of date range", path)
                await tally.record(VisitOutcome.skipped(path))
                return
            if limit is not None and submitted >= limit:
                return
            submitted += 1
            logger.debug("Processing file %s", path)
            await tally.record(await invoke_handler(handler, logger, path, file_date))

        for partition in partitions:
            if limit is not None and submitted >= limit:
                logger.debug("Limit of %d files reached, stopping", limit)
                break
            pattern = partition_pattern(partition, scheme, schema, extensions, window)
            logger.verbose(
                "Processing partition %s with pattern %s",
                partition.directory or ".",
                pattern,
            )
            budget = None
            if limit is not None and not fine_check:
                budget = limit - submitted
            await enumerator.enumerate(
                root_directory,
                visit,
                pattern=pattern,
                limit=budget,
                concurrency=workers,
            )

    if tally.skipped:
        logger.verbose("Skipped %d files outside of date range", tally.skipped)
    return tally.succeeded
