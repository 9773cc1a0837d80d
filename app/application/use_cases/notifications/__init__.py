"""Public helpers for emitting dashboard notifications."""

from .database_changes import handle_database_change
from .events import (
    new_notification_id,
    notify_alert_created,
    notify_alert_resolved,
    notify_delivery_assigned,
    notify_delivery_completed,
    notify_stock_low,
    notify_user_registered,
    priority_for_severity,
)

__all__ = [
    "handle_database_change",
    "new_notification_id",
    "priority_for_severity",
    "notify_user_registered",
    "notify_alert_created",
    "notify_alert_resolved",
    "notify_delivery_assigned",
    "notify_delivery_completed",
    "notify_stock_low",
]
