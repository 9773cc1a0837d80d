"""Tests for the timezone helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.utils import format_relative_time, parse_app_datetime

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=10), "less than a minute ago"),
        (timedelta(seconds=50), "1 minute ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(hours=3), "3 hours ago"),
        (timedelta(days=2), "2 days ago"),
        (timedelta(days=-1), "in 1 day"),
    ],
)
def test_format_relative_time(delta, expected):
    assert format_relative_time(NOW - delta, now=NOW) == expected


def test_parse_app_datetime_localizes_to_app_timezone():
    parsed = parse_app_datetime("2024-03-01T12:00:00+00:00")

    assert parsed == NOW
    assert parsed.utcoffset() == timedelta(hours=5, minutes=30)


def test_parse_app_datetime_rejects_garbage():
    with pytest.raises(ValueError):
        parse_app_datetime("not a timestamp")
