"""Tests for input data models."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from filedrawer.input.models import (
    DateWindow,
    TraversalRequest,
    normalize_extensions,
    resolve_timezone,
)

UTC = timezone.utc


class TestNormalizeExtensions:
    """Tests for normalize_extensions function."""

    def test_strips_dots_and_blanks(self) -> None:
        """Leading dots and empty entries should be removed."""
        assert normalize_extensions([".eml", " msg ", "", "."]) == ["eml", "msg"]

    def test_order_and_first_wins(self) -> None:
        """Order should be kept and duplicates dropped."""
        assert normalize_extensions(["msg", "eml", ".msg"]) == ["msg", "eml"]

    def test_none(self) -> None:
        """None should give an empty list."""
        assert normalize_extensions(None) == []


class TestResolveTimezone:
    """Tests for resolve_timezone function."""

    def test_known(self) -> None:
        """Known IANA names should resolve."""
        assert resolve_timezone("Europe/Paris") == ZoneInfo("Europe/Paris")

    def test_unknown(self) -> None:
        """Unknown names should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown timezone"):
            resolve_timezone("Mars/Olympus_Mons")


class TestTraversalRequest:
    """Tests for TraversalRequest validation."""

    def test_empty_root_rejected(self) -> None:
        """An empty root should be rejected."""
        with pytest.raises(ValueError, match="root_directory"):
            TraversalRequest(root_directory="")

    def test_concurrency_positive(self) -> None:
        """Concurrency below one should be rejected."""
        with pytest.raises(ValueError, match="concurrency"):
            TraversalRequest(root_directory="/in", concurrency=0)

    def test_limit_positive(self) -> None:
        """A zero limit should be rejected."""
        with pytest.raises(ValueError, match="limit"):
            TraversalRequest(root_directory="/in", limit=0)


class TestDateWindow:
    """Tests for DateWindow."""

    def test_naive_bounds_localized(self) -> None:
        """Naive bounds should take the window timezone."""
        window = DateWindow(
            datetime(2024, 1, 1), datetime(2024, 1, 2), "America/Chicago"
        )
        assert window.start.tzinfo == ZoneInfo("America/Chicago")
        assert window.start_utc == datetime(2024, 1, 1, 6, tzinfo=UTC)

    def test_reversed_rejected(self) -> None:
        """start after end should be rejected."""
        with pytest.raises(ValueError, match="is after"):
            DateWindow(datetime(2024, 1, 2, tzinfo=UTC), datetime(2024, 1, 1, tzinfo=UTC))

    def test_contains_inclusive(self) -> None:
        """Both bounds should be inside the window."""
        start = datetime(2024, 1, 1, tzinfo=UTC)
        end = datetime(2024, 1, 2, tzinfo=UTC)
        window = DateWindow(start, end)
        assert window.contains(start)
        assert window.contains(end)
        assert not window.contains(start - timedelta(microseconds=1))
        assert not window.contains(end + timedelta(microseconds=1))
