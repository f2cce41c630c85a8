"""Unit tests for display formatting helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from modqueue.domain.services.display_format import (
    format_date,
    format_relative_date,
    format_response_time,
    priority_color,
    risk_level_color,
    status_label,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


class TestColors:
    def test_known_levels(self) -> None:
        assert "red" in priority_color("high")
        assert "green" in risk_level_color("low")

    def test_unknown_level_uses_medium(self) -> None:
        assert priority_color("urgent") == priority_color("medium")
        assert risk_level_color("") == risk_level_color("medium")


class TestStatusLabel:
    def test_known_and_unknown(self) -> None:
        assert status_label("in_review") == "In review"
        assert status_label("archived") == "archived"


class TestFormatResponseTime:
    """Tests for format_response_time."""

    @pytest.mark.parametrize(
        ("hours", "expected"),
        [(5, "5h"), (23.4, "23h"), (48, "2d"), (24 * 6, "6d"), (24 * 14, "2w")],
    )
    def test_units(self, hours: float, expected: str) -> None:
        assert format_response_time(hours) == expected


class TestFormatRelativeDate:
    """Tests for format_relative_date."""

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(seconds=30), "just now"),
            (timedelta(minutes=1), "1 minute ago"),
            (timedelta(minutes=5), "5 minutes ago"),
            (timedelta(hours=3), "3 hours ago"),
            (timedelta(days=1), "1 day ago"),
            (timedelta(days=30), "30 days ago"),
        ],
    )
    def test_relative(self, delta: timedelta, expected: str) -> None:
        assert format_relative_date(NOW - delta, now=NOW) == expected

    def test_older_dates_are_absolute(self) -> None:
        value = NOW - timedelta(days=45)
        assert format_relative_date(value, now=NOW) == format_date(value) == "2026-01-29"
