"""Domain entity representing a dashboard notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_TYPE_USER_REGISTERED = "user_registered"
NOTIFICATION_TYPE_ALERT_CREATED = "alert_created"
NOTIFICATION_TYPE_ALERT_RESOLVED = "alert_resolved"
NOTIFICATION_TYPE_DELIVERY_ASSIGNED = "delivery_assigned"
NOTIFICATION_TYPE_DELIVERY_COMPLETED = "delivery_completed"
NOTIFICATION_TYPE_STOCK_LOW = "stock_low"
NOTIFICATION_TYPE_OTHER = "other"

NOTIFICATION_TYPES = (
    NOTIFICATION_TYPE_USER_REGISTERED,
    NOTIFICATION_TYPE_ALERT_CREATED,
    NOTIFICATION_TYPE_ALERT_RESOLVED,
    NOTIFICATION_TYPE_DELIVERY_ASSIGNED,
    NOTIFICATION_TYPE_DELIVERY_COMPLETED,
    NOTIFICATION_TYPE_STOCK_LOW,
    NOTIFICATION_TYPE_OTHER,
)

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"

NOTIFICATION_PRIORITIES = (PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW)


@dataclass(frozen=True)
class Notification:
    """Message shown in the dashboard bell and notification list.

    Instances are immutable; read-state changes go through the publisher,
    which swaps in a copy built with :func:`dataclasses.replace`.
    """

    id: str
    type: str
    title: str
    message: str
    priority: str
    timestamp: datetime
    read: bool = False
    action_url: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Notification id is required")
        if self.type not in NOTIFICATION_TYPES:
            raise ValueError(f"Unknown notification type: {self.type!r}")
        if self.priority not in NOTIFICATION_PRIORITIES:
            raise ValueError(f"Unknown notification priority: {self.priority!r}")
        # Detach the payload from the caller's dict.
        object.__setattr__(self, "data", dict(self.data or {}))


@dataclass(frozen=True)
class NotificationSnapshot:
    """Full notification state observed after a mutation, newest first."""

    notifications: tuple[Notification, ...]
    unread_count: int


__all__ = [
    "Notification",
    "NotificationSnapshot",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_USER_REGISTERED",
    "NOTIFICATION_TYPE_ALERT_CREATED",
    "NOTIFICATION_TYPE_ALERT_RESOLVED",
    "NOTIFICATION_TYPE_DELIVERY_ASSIGNED",
    "NOTIFICATION_TYPE_DELIVERY_COMPLETED",
    "NOTIFICATION_TYPE_STOCK_LOW",
    "NOTIFICATION_TYPE_OTHER",
    "NOTIFICATION_PRIORITIES",
    "PRIORITY_HIGH",
    "PRIORITY_MEDIUM",
    "PRIORITY_LOW",
]
