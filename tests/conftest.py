"""Shared pytest configuration."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "sakhi_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["APP_TIMEZONE"] = "UTC+05:30"

from app.domain.entities import Notification  # noqa: E402

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_notification(
    index: int,
    *,
    notification_type: str = "other",
    priority: str = "medium",
    read: bool = False,
    action_url: str | None = None,
) -> Notification:
    """Return a notification ``N<index>`` created ``index`` minutes after the base time."""

    return Notification(
        id=f"N{index}",
        type=notification_type,
        title=f"Notification {index}",
        message=f"Message {index}",
        priority=priority,
        timestamp=BASE_TIME + timedelta(minutes=index),
        read=read,
        action_url=action_url,
    )


@pytest.fixture()
def notification_factory():
    return make_notification
