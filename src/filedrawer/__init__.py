"""filedrawer: discover files in flat or date-partitioned directories.

Discovered files are fed one at a time to a caller-supplied handler under
a configurable concurrency bound.
"""

__version__ = "0.1.0"
