"""Input reader bound to a configuration.

Callers that process input repeatedly (for example once per date window)
bind the configuration, feature set and logger once and call ``process``
with only the handler and window.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import TYPE_CHECKING

from filedrawer.input import process as dispatcher
from filedrawer.input.interfaces import Enumerator, FileHandler, InputLogger

if TYPE_CHECKING:
    from filedrawer.config.models import InputConfig


class InputReader:
    """Dispatches input traversal with fixed configuration.

    Example:
        reader = InputReader(config.input, features, wrap_logger())
        count = await reader.process(handle_file)
    """

    def __init__(
        self,
        config: InputConfig,
        features: Collection[str],
        logger: InputLogger,
        enumerator: Enumerator | None = None,
    ) -> None:
        self.config = config
        self.features = features
        self.logger = logger
        self.enumerator = enumerator

    async def process(
        self,
        handler: FileHandler,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> int:
        """Run one traversal. See filedrawer.input.process.process."""
        return await dispatcher.process(
            self.config,
            self.features,
            self.logger,
            handler,
            start=start,
            end=end,
            enumerator=self.enumerator,
        )
