"""Snapshot persistence for the notification list."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from typing import Any

from app.domain.entities import NOTIFICATION_TYPE_OTHER, NOTIFICATION_TYPES, Notification
from app.infrastructure.storage import KeyValueStorage
from app.utils import ensure_app_timezone, parse_app_datetime

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "notifications"
DEFAULT_CAPACITY = 20


class NotificationSnapshotStore:
    """Read and overwrite the whole notification list in a single storage slot.

    The snapshot is a JSON array of notification records, newest first, with
    timestamps stored as ISO strings. Every save replaces the previous value;
    there are no partial writes, so a truncated value can only come from an
    interrupted write and is handled by :meth:`load` like any other corrupt
    snapshot.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self._storage = storage
        self._key = key
        self._capacity = capacity

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Notification]:
        """Return the persisted notifications, or ``[]`` if missing or corrupt."""

        raw = self._storage.get_item(self._key)
        if not raw:
            return []

        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError("snapshot is not a list")
            notifications = [deserialize_notification(record) for record in records]
        except (TypeError, ValueError, KeyError, RecursionError) as exc:
            logger.warning(
                "Discarding corrupt notification snapshot in slot '%s': %s", self._key, exc
            )
            return []

        unique: list[Notification] = []
        seen: set[str] = set()
        for notification in notifications:
            if notification.id in seen:
                continue
            seen.add(notification.id)
            unique.append(notification)
        return unique[: self._capacity]

    def save(self, notifications: Sequence[Notification]) -> None:
        """Serialize ``notifications`` and overwrite the snapshot slot."""

        payload = json.dumps([serialize_notification(n) for n in notifications])
        self._storage.set_item(self._key, payload)

    def clear(self) -> None:
        self._storage.remove_item(self._key)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return a JSON-serializable representation of ``notification``."""

    timestamp = ensure_app_timezone(notification.timestamp)
    return {
        "id": notification.id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "priority": notification.priority,
        "timestamp": timestamp.isoformat() if timestamp else None,
        "read": notification.read,
        "action_url": notification.action_url,
        "user_id": notification.user_id,
        "user_name": notification.user_name,
        "data": notification.data or {},
    }


def deserialize_notification(record: Any) -> Notification:
    """Build a :class:`Notification` from a stored record.

    Raises ``ValueError``/``KeyError``/``TypeError`` when ``record`` is not a
    valid notification. Types that are no longer known are kept as ``other``.
    """

    if not isinstance(record, dict):
        raise ValueError("notification record is not an object")

    timestamp = record["timestamp"]
    if not isinstance(timestamp, str):
        raise ValueError("notification timestamp must be an ISO string")

    notification_type = record.get("type")
    if notification_type not in NOTIFICATION_TYPES:
        notification_type = NOTIFICATION_TYPE_OTHER

    data = record.get("data") or {}
    if not isinstance(data, dict):
        raise ValueError("notification data must be an object")

    read = record.get("read", False)
    if not isinstance(read, bool):
        raise ValueError("notification read flag must be a boolean")

    return Notification(
        id=str(record["id"]),
        type=notification_type,
        title=str(record["title"]),
        message=str(record["message"]),
        priority=record["priority"],
        timestamp=parse_app_datetime(timestamp),
        read=read,
        action_url=record.get("action_url") or None,
        user_id=_optional_str(record.get("user_id")),
        user_name=_optional_str(record.get("user_name")),
        data=data,
    )


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def serialize_notifications(notifications: Iterable[Notification]) -> list[dict[str, Any]]:
    return [serialize_notification(notification) for notification in notifications]


__all__ = [
    "NotificationSnapshotStore",
    "serialize_notification",
    "serialize_notifications",
    "deserialize_notification",
    "DEFAULT_STORAGE_KEY",
    "DEFAULT_CAPACITY",
]
