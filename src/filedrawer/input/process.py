"""Input dispatcher.

Chooses between structured and unstructured traversal from the enabled
features, checks the configuration each mode needs, and reports how many
files were processed.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import TYPE_CHECKING

from filedrawer.feature_flags import Feature
from filedrawer.input import structured, unstructured
from filedrawer.input.exceptions import (
    ConfigMissingError,
    FeatureDisabledError,
    WindowNotAllowedError,
    WindowRequiredError,
)
from filedrawer.input.interfaces import Enumerator, FileHandler, InputLogger

if TYPE_CHECKING:
    from filedrawer.config.models import InputConfig


async def process(
    config: InputConfig,
    features: Collection[str],
    logger: InputLogger,
    handler: FileHandler,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
    enumerator: Enumerator | None = None,
) -> int:
    """Traverse the configured input directory.

    Args:
        config: Input configuration (read only).
        features: Enabled feature names.
        logger: Six-level logger.
        handler: Per-file handler. Called with ``(path)`` for unstructured
            input and ``(path, date)`` for structured input.
        start: Window start; required with structured input, forbidden
            otherwise.
        end: Window end; same rules as ``start``.
        enumerator: Filesystem enumerator passed to the scanner.

    Returns:
        Number of files whose handler completed without raising.

    Raises:
        FeatureDisabledError: If the input feature is not enabled.
        ConfigMissingError: If concurrency or the input directory is unset.
        WindowRequiredError: If structured input lacks a start or end.
        WindowNotAllowedError: If unstructured input is given a start or end.
    """
    if Feature.INPUT.value not in features:
        raise FeatureDisabledError()

    concurrency = config.concurrency
    if not concurrency:
        raise ConfigMissingError("concurrency")

    input_directory = config.input_directory
    if not input_directory:
        raise ConfigMissingError("input_directory")
    root = str(input_directory)

    if Feature.STRUCTURED_INPUT.value in features:
        logger.debug(
            "Processing Structured Input from %s with start date %s and end date %s",
            root,
            start,
            end,
        )
        if start is None or end is None:
            raise WindowRequiredError()
        file_count = await structured.process(
            config.input_structure,
            config.input_filename_options,
            config.extensions,
            config.timezone,
            start,
            end,
            config.limit,
            features,
            logger,
            root,
            handler,
            concurrency,
            enumerator=enumerator,
        )
    else:
        logger.debug("Processing Unstructured Input from %s", root)
        if start is not None or end is not None:
            raise WindowNotAllowedError()
        file_count = await unstructured.process(
            root,
            config.recursive or False,
            config.extensions or [],
            config.limit,
            logger,
            handler,
            concurrency,
            enumerator=enumerator,
        )

    logger.info("Processed %d files matching criteria.", file_count)
    return file_count
