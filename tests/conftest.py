"""Shared test fixtures for filedrawer."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Callable, Iterable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from filedrawer.config.loader import clear_config_cache
from filedrawer.input.interfaces import Enumerator, Visitor
from filedrawer.input.patterns import GlobPattern
from filedrawer.input.pool import run_bounded


class FakeEnumerator(Enumerator):
    """Enumerator over a fixed list of relative paths.

    Paths are matched with the real GlobPattern and visited through the real
    worker pool, so scanner tests see the same ordering, limit and
    concurrency behavior as with the filesystem, without touching it.
    """

    def __init__(self, paths: Iterable[str], error: BaseException | None = None):
        self.paths = sorted(paths)
        self.error = error
        self.calls: list[dict] = []

    async def _source(self, glob: GlobPattern) -> AsyncIterator[str]:
        for path in self.paths:
            if glob.matches(path):
                yield path

    async def enumerate(
        self,
        root: str,
        visitor: Visitor,
        *,
        pattern: str,
        limit: int | None = None,
        concurrency: int | None = None,
    ) -> None:
        self.calls.append(
            {
                "root": root,
                "pattern": pattern,
                "limit": limit,
                "concurrency": concurrency,
            }
        )
        if self.error is not None:
            raise self.error
        await run_bounded(
            self._source(GlobPattern(pattern)),
            visitor,
            concurrency=concurrency,
            limit=limit,
        )


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep the user's ~/.filedrawer and FILEDRAWER_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("FILEDRAWER_"):
            monkeypatch.delenv(key)
    data_dir = tmp_path / "filedrawer-data"
    monkeypatch.setenv("FILEDRAWER_DATA_DIR", str(data_dir))
    clear_config_cache()
    yield data_dir
    clear_config_cache()


@pytest.fixture
def data_dir(isolated_environment: Path) -> Path:
    """Return the (not yet created) isolated data directory."""
    return isolated_environment


@pytest.fixture
def mock_logger() -> MagicMock:
    """Return a mock six-level input logger."""
    logger = MagicMock()
    for name in ("debug", "info", "warn", "error", "verbose", "silly"):
        setattr(logger, name, MagicMock())
    return logger


@pytest.fixture
def fake_enumerator() -> Callable[..., FakeEnumerator]:
    """Return a factory for FakeEnumerator instances."""
    return FakeEnumerator


@pytest.fixture
def input_tree(tmp_path: Path) -> Path:
    """Create a small unstructured input directory.

    Layout:
        a.txt, b.eml, c.msg, .hidden.txt
        sub/d.txt, sub/deeper/e.eml
        .git/config.txt
    """
    root = tmp_path / "input"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / ".git").mkdir()
    for name in ("a.txt", "b.eml", "c.msg", ".hidden.txt"):
        (root / name).write_text(name)
    (root / "sub" / "d.txt").write_text("d")
    (root / "sub" / "deeper" / "e.eml").write_text("e")
    (root / ".git" / "config.txt").write_text("git")
    return root


@pytest.fixture
def daily_tree(tmp_path: Path) -> Path:
    """Create a day-partitioned input directory with HHMM-subject names.

    Layout:
        2024/01/14/2300-late.log
        2024/01/15/0000-midnight.log, 0930-standup.log, 2359-last.log
        2024/01/16/0800-morning.log
        2024/02/01/1200-february.log
    """
    root = tmp_path / "structured"
    files = {
        "2024/01/14": ["2300-late.log"],
        "2024/01/15": ["0000-midnight.log", "0930-standup.log", "2359-last.log"],
        "2024/01/16": ["0800-morning.log"],
        "2024/02/01": ["1200-february.log"],
    }
    for directory, names in files.items():
        (root / directory).mkdir(parents=True)
        for name in names:
            (root / directory / name).write_text(name)
    return root
