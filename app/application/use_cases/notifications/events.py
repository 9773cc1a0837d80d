"""Utility helpers to generate and publish dashboard notifications."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from app.config import get_settings
from app.domain.entities import (
    NOTIFICATION_TYPE_ALERT_CREATED,
    NOTIFICATION_TYPE_ALERT_RESOLVED,
    NOTIFICATION_TYPE_DELIVERY_ASSIGNED,
    NOTIFICATION_TYPE_DELIVERY_COMPLETED,
    NOTIFICATION_TYPE_STOCK_LOW,
    NOTIFICATION_TYPE_USER_REGISTERED,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    Notification,
)
from app.infrastructure.notifications import NotificationPublisher
from app.utils import now_in_app_timezone

ADMIN_APP_USERS_URL = "/admin/app-users"
ADMIN_ALERTS_URL = "/admin/alerts"
ADMIN_DELIVERIES_URL = "/admin/deliveries"
INVENTORY_URL = "/delivery/inventory"


def new_notification_id(prefix: str) -> str:
    """Return a unique identifier such as ``alert-3f2c...``."""

    return f"{prefix}-{uuid4().hex}"


def _publish(
    publisher: NotificationPublisher,
    *,
    prefix: str,
    notification_type: str,
    title: str,
    message: str,
    priority: str,
    action_url: str | None,
    user_id: str | None = None,
    user_name: str | None = None,
    data: dict[str, Any] | None = None,
) -> Notification:
    notification = Notification(
        id=new_notification_id(prefix),
        type=notification_type,
        title=title,
        message=message,
        priority=priority,
        timestamp=now_in_app_timezone(),
        read=False,
        action_url=action_url,
        user_id=user_id,
        user_name=user_name,
        data=data or {},
    )
    publisher.publish(notification)
    return notification


def priority_for_severity(severity: str | None) -> str:
    """Map an alert severity onto a notification priority."""

    normalized = (severity or "").strip().lower()
    if normalized == PRIORITY_HIGH:
        return PRIORITY_HIGH
    if normalized == PRIORITY_MEDIUM:
        return PRIORITY_MEDIUM
    return PRIORITY_LOW


def notify_user_registered(
    publisher: NotificationPublisher, *, user_id: str | None, full_name: str | None
) -> Notification:
    """Tell admins that a new app user joined the platform."""

    return _publish(
        publisher,
        prefix="user",
        notification_type=NOTIFICATION_TYPE_USER_REGISTERED,
        title="New User Registered",
        message=f"{full_name or 'A new user'} just joined the platform",
        priority=PRIORITY_MEDIUM,
        action_url=ADMIN_APP_USERS_URL,
        user_id=user_id,
        user_name=full_name,
    )


def notify_alert_created(
    publisher: NotificationPublisher,
    *,
    woman_name: str | None,
    alert_type: str,
    severity: str | None,
    alert_id: str | None = None,
) -> Notification:
    """Raise a notification for a new health alert."""

    priority = priority_for_severity(severity)
    title = "High Priority Alert!" if priority == PRIORITY_HIGH else "New Alert"
    return _publish(
        publisher,
        prefix="alert",
        notification_type=NOTIFICATION_TYPE_ALERT_CREATED,
        title=title,
        message=f"{woman_name or 'Unknown'}: {alert_type}",
        priority=priority,
        action_url=ADMIN_ALERTS_URL,
        user_name=woman_name,
        data={"alert_id": alert_id, "severity": severity},
    )


def notify_alert_resolved(
    publisher: NotificationPublisher,
    *,
    woman_name: str | None,
    alert_type: str,
    alert_id: str | None = None,
) -> Notification:
    return _publish(
        publisher,
        prefix="alert-resolved",
        notification_type=NOTIFICATION_TYPE_ALERT_RESOLVED,
        title="Alert Resolved",
        message=f"{alert_type} alert for {woman_name or 'Unknown'} has been resolved",
        priority=PRIORITY_LOW,
        action_url=ADMIN_ALERTS_URL,
        user_name=woman_name,
        data={"alert_id": alert_id} if alert_id else None,
    )


def notify_delivery_assigned(
    publisher: NotificationPublisher,
    *,
    woman_name: str | None,
    delivery_id: str | None = None,
) -> Notification:
    return _publish(
        publisher,
        prefix="delivery",
        notification_type=NOTIFICATION_TYPE_DELIVERY_ASSIGNED,
        title="New Delivery Assigned",
        message=f"Delivery for {woman_name or 'Unknown'} has been created",
        priority=PRIORITY_MEDIUM,
        action_url=ADMIN_DELIVERIES_URL,
        user_name=woman_name,
        data={"delivery_id": delivery_id} if delivery_id else None,
    )


def notify_delivery_completed(
    publisher: NotificationPublisher,
    *,
    woman_name: str | None,
    delivery_id: str | None = None,
) -> Notification:
    return _publish(
        publisher,
        prefix="delivery-completed",
        notification_type=NOTIFICATION_TYPE_DELIVERY_COMPLETED,
        title="Delivery Completed",
        message=f"Delivery to {woman_name or 'Unknown'} has been completed",
        priority=PRIORITY_LOW,
        action_url=ADMIN_DELIVERIES_URL,
        user_name=woman_name,
        data={"delivery_id": delivery_id} if delivery_id else None,
    )


def notify_stock_low(
    publisher: NotificationPublisher,
    *,
    item_name: str,
    quantity: int,
    threshold: int | None = None,
) -> Notification | None:
    """Publish a stock warning when ``quantity`` is at or below ``threshold``.

    ``threshold`` falls back to the ``STOCK_LOW_THRESHOLD`` setting. Returns
    ``None`` when the item is still sufficiently stocked.
    """

    limit = get_settings().stock_low_threshold if threshold is None else threshold
    if quantity > limit:
        return None

    if quantity <= 0:
        message = f"{item_name} is out of stock"
        priority = PRIORITY_HIGH
    else:
        message = f"{item_name} is running low ({quantity} left, threshold {limit})"
        priority = PRIORITY_MEDIUM

    return _publish(
        publisher,
        prefix="stock",
        notification_type=NOTIFICATION_TYPE_STOCK_LOW,
        title="Low Stock",
        message=message,
        priority=priority,
        action_url=INVENTORY_URL,
        data={"item_name": item_name, "quantity": quantity, "threshold": limit},
    )


__all__ = [
    "new_notification_id",
    "priority_for_severity",
    "notify_user_registered",
    "notify_alert_created",
    "notify_alert_resolved",
    "notify_delivery_assigned",
    "notify_delivery_completed",
    "notify_stock_low",
]
