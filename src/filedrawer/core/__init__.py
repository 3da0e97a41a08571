"""Core utilities package.

Pure helper functions shared by the CLI and the input package.
"""

from filedrawer.core.datetime_utils import (
    parse_iso_timestamp,
    parse_relative_time,
    parse_window_bound,
)

__all__ = [
    "parse_iso_timestamp",
    "parse_relative_time",
    "parse_window_bound",
]
