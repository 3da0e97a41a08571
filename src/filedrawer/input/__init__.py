"""Input traversal for filedrawer.

Discovers files under an input directory and feeds them to a handler under
a concurrency bound, either as a flat or recursive glob (unstructured) or
through date partitions filtered by a window (structured).
"""

from filedrawer.input.enumerator import FilesystemEnumerator
from filedrawer.input.exceptions import (
    ConfigMissingError,
    FeatureDisabledError,
    InputError,
    WindowNotAllowedError,
    WindowRequiredError,
)
from filedrawer.input.filename import FilenameComponent, FilenameSchema
from filedrawer.input.interfaces import Enumerator, FileHandler, InputLogger
from filedrawer.input.models import (
    DateWindow,
    OutcomeStatus,
    TraversalRequest,
    VisitOutcome,
)
from filedrawer.input.partitions import Partition, PartitionScheme
from filedrawer.input.patterns import GlobPattern, build_pattern
from filedrawer.input.reader import InputReader

__all__ = [
    "ConfigMissingError",
    "DateWindow",
    "Enumerator",
    "FeatureDisabledError",
    "FileHandler",
    "FilenameComponent",
    "FilenameSchema",
    "FilesystemEnumerator",
    "GlobPattern",
    "InputError",
    "InputLogger",
    "InputReader",
    "OutcomeStatus",
    "Partition",
    "PartitionScheme",
    "TraversalRequest",
    "VisitOutcome",
    "WindowNotAllowedError",
    "WindowRequiredError",
    "build_pattern",
]
