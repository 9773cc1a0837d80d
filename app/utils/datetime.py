"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "Asia/Kolkata"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)
_RELATIVE_UNITS: Final[tuple[tuple[str, int], ...]] = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable (via
    the ``Settings`` model). If the provided value cannot be resolved, the
    default ``Asia/Kolkata`` timezone is used as a fallback.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_in_app_timezone() -> datetime:
    """Return the current time localized to the configured timezone."""

    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Return the current localized time without attaching ``tzinfo``."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in the configured timezone."""

    if value is None:
        return None

    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def parse_app_datetime(value: str) -> datetime:
    """Parse an ISO-8601 string into an aware datetime in the app timezone.

    Raises ``ValueError`` when ``value`` is not a valid ISO timestamp.
    """

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    parsed = ensure_app_timezone(datetime.fromisoformat(text))
    if parsed is None:  # pragma: no cover - fromisoformat never returns None
        msg = f"Invalid timestamp: {value!r}"
        raise ValueError(msg)
    return parsed


def format_relative_time(value: datetime, *, now: datetime | None = None) -> str:
    """Describe ``value`` relative to ``now`` ("5 minutes ago", "in 2 hours")."""

    reference = ensure_app_timezone(now) or now_in_app_timezone()
    moment = ensure_app_timezone(value) or reference
    seconds = int((reference - moment).total_seconds())
    future = seconds < 0
    seconds = abs(seconds)

    if seconds < 45:
        label = "less than a minute"
    else:
        label = "1 minute"
        for unit, size in _RELATIVE_UNITS:
            amount = round(seconds / size)
            if amount >= 1:
                label = f"{amount} {unit}" if amount == 1 else f"{amount} {unit}s"
                break

    return f"in {label}" if future else f"{label} ago"


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return ZoneInfo(_DEFAULT_TIMEZONE)
