"""Glob pattern construction and matching.

Pattern construction turns a recursive flag and an extension allow-list
into a shell-style glob. Matching supports the subset of glob syntax the
scanners produce: ``*``, ``?``, ``[...]`` character classes, ``{a,b}``
alternation and ``**`` directory wildcards. Matching is case-sensitive.
Like shell globs, wildcards never match a leading dot in a path segment
unless the pattern segment itself starts with a dot.
"""

from __future__ import annotations

import fnmatch
import re
from collections.abc import Sequence
from functools import lru_cache

GLOBSTAR = "**"


def extension_suffix(extensions: Sequence[str]) -> str:
    """Build the extension portion of a file pattern.

    Args:
        extensions: Bare extensions (no leading dot), in the order supplied.

    Returns:
        ".{ext1,ext2}" when extensions are given, ".*" otherwise.
    """
    if not extensions:
        return ".*"
    return ".{" + ",".join(extensions) + "}"


def build_pattern(recursive: bool, extensions: Sequence[str]) -> str:
    """Build the glob pattern for an unstructured traversal.

    Examples:
        >>> build_pattern(False, [])
        '*.*'
        >>> build_pattern(True, [])
        '**/*'
        >>> build_pattern(False, ["eml", "msg"])
        '*.{eml,msg}'
        >>> build_pattern(True, ["txt"])
        '**/*.{txt}'
    """
    if not extensions:
        return "**/*" if recursive else "*.*"
    prefix = "**/*" if recursive else "*"
    return prefix + extension_suffix(extensions)


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternation into separate patterns.

    Nested braces are supported. A brace group without a comma is kept as a
    single alternative, so ``*.{txt}`` expands to ``['*.txt']``.

    Args:
        pattern: Glob pattern possibly containing brace groups.

    Returns:
        List of brace-free patterns, in left-to-right alternative order.
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    options: list[str] = []
    last = start + 1
    for i in range(start, len(pattern)):
        char = pattern[i]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                options.append(pattern[last:i])
                head, tail = pattern[:start], pattern[i + 1 :]
                expanded: list[str] = []
                for option in options:
                    for alternative in expand_braces(option):
                        expanded.extend(expand_braces(head + alternative + tail))
                return expanded
        elif char == "," and depth == 1:
            options.append(pattern[last:i])
            last = i + 1

    # Unbalanced brace: treat literally
    return [pattern]


@lru_cache(maxsize=512)
def _segment_regex(segment: str) -> re.Pattern[str]:
    return re.compile(fnmatch.translate(segment))


def _segment_matches(pattern: str, name: str) -> bool:
    if name.startswith(".") and not pattern.startswith("."):
        return False
    return _segment_regex(pattern).match(name) is not None


def _match_parts(pats: Sequence[str], parts: Sequence[str]) -> bool:
    if not pats:
        return not parts
    head = pats[0]
    if head == GLOBSTAR:
        # Zero or more non-hidden directories
        for i in range(len(parts)):
            if _match_parts(pats[1:], parts[i:]):
                return True
            if parts[i].startswith("."):
                return False
        return _match_parts(pats[1:], ())
    if not parts:
        return False
    return _segment_matches(head, parts[0]) and _match_parts(pats[1:], parts[1:])


def _could_contain(pats: Sequence[str], parts: Sequence[str]) -> bool:
    if not pats:
        return False
    head = pats[0]
    if head == GLOBSTAR:
        if len(pats) == 1:
            return not any(part.startswith(".") for part in parts)
        for i in range(len(parts) + 1):
            if _could_contain(pats[1:], parts[i:]):
                return True
            if i < len(parts) and parts[i].startswith("."):
                return False
        return False
    if not parts:
        # The directory itself must be followed by at least one more segment
        return True
    if len(pats) == 1:
        return False
    return _segment_matches(head, parts[0]) and _could_contain(pats[1:], parts[1:])


class GlobPattern:
    """Compiled glob pattern matched against relative POSIX paths."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        self._alternatives: list[tuple[str, ...]] = [
            tuple(part for part in alternative.split("/") if part)
            for alternative in expand_braces(pattern)
        ]

    def __repr__(self) -> str:
        return f"GlobPattern({self.pattern!r})"

    @property
    def recursive(self) -> bool:
        """Whether any alternative can match at unbounded depth."""
        return any(GLOBSTAR in alt for alt in self._alternatives)

    def matches(self, relative_path: str) -> bool:
        """Check whether a file path (relative to the root) matches."""
        parts = tuple(part for part in relative_path.split("/") if part)
        return any(_match_parts(alt, parts) for alt in self._alternatives)

    def could_contain(self, relative_dir: str) -> bool:
        """Check whether files under a directory could match.

        Used to prune the walk. The root directory is represented by "".
        """
        parts = tuple(part for part in relative_dir.split("/") if part)
        return any(_could_contain(alt, parts) for alt in self._alternatives)
