"""Notification state, persistence and realtime delivery for the infrastructure layer."""

from .lifecycle import (
    create_notification_publisher,
    shutdown_notification_publisher,
    start_notification_publisher,
)
from .manager import NotificationConnectionManager, notification_manager
from .publisher import NotificationPublisher, Unsubscribe
from .realtime import WebsocketNotificationRelay, websocket_notification_relay
from .store import (
    NotificationSnapshotStore,
    deserialize_notification,
    serialize_notification,
    serialize_notifications,
)

__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "NotificationPublisher",
    "Unsubscribe",
    "NotificationSnapshotStore",
    "serialize_notification",
    "serialize_notifications",
    "deserialize_notification",
    "WebsocketNotificationRelay",
    "websocket_notification_relay",
    "create_notification_publisher",
    "start_notification_publisher",
    "shutdown_notification_publisher",
]
