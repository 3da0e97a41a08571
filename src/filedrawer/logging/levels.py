"""Extra log levels.

The input logger capability has six severities. ``verbose`` and ``silly``
have no stdlib equivalent, so they are registered here as numeric levels
between the standard ones.
"""

import logging

VERBOSE = 15  # between DEBUG and INFO
SILLY = 5  # below DEBUG

logging.addLevelName(VERBOSE, "VERBOSE")
logging.addLevelName(SILLY, "SILLY")

# Lowercase level names accepted in configuration and on the CLI.
LEVEL_MAP: dict[str, int] = {
    "silly": SILLY,
    "debug": logging.DEBUG,
    "verbose": VERBOSE,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
