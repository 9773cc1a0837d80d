"""Domain entities exposed by the application."""

from .database_change import (
    CHANGE_DELETE,
    CHANGE_INSERT,
    CHANGE_UPDATE,
    DatabaseChange,
)
from .notification import (
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPE_ALERT_CREATED,
    NOTIFICATION_TYPE_ALERT_RESOLVED,
    NOTIFICATION_TYPE_DELIVERY_ASSIGNED,
    NOTIFICATION_TYPE_DELIVERY_COMPLETED,
    NOTIFICATION_TYPE_OTHER,
    NOTIFICATION_TYPE_STOCK_LOW,
    NOTIFICATION_TYPE_USER_REGISTERED,
    NOTIFICATION_TYPES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    Notification,
    NotificationSnapshot,
)

__all__ = [
    "DatabaseChange",
    "CHANGE_INSERT",
    "CHANGE_UPDATE",
    "CHANGE_DELETE",
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
