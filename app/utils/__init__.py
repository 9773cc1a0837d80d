"""Utility helpers for reusable functionality."""

from .datetime import (
    ensure_app_timezone,
    format_relative_time,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    parse_app_datetime,
)

__all__ = [
    "ensure_app_timezone",
    "format_relative_time",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "parse_app_datetime",
]
