"""View-model behind the dashboard notification bell and its dropdown panel."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from app.domain.entities import (
    NOTIFICATION_TYPE_ALERT_CREATED,
    NOTIFICATION_TYPE_ALERT_RESOLVED,
    NOTIFICATION_TYPE_DELIVERY_ASSIGNED,
    NOTIFICATION_TYPE_DELIVERY_COMPLETED,
    NOTIFICATION_TYPE_STOCK_LOW,
    NOTIFICATION_TYPE_USER_REGISTERED,
    Notification,
    NotificationSnapshot,
)
from app.infrastructure.notifications import NotificationPublisher, Unsubscribe
from app.utils import format_relative_time

DEFAULT_PREVIEW_SIZE = 5
BADGE_LIMIT = 9

# (icon, colour) per notification type.
NOTIFICATION_ICONS: dict[str, tuple[str, str]] = {
    NOTIFICATION_TYPE_USER_REGISTERED: ("user-plus", "green"),
    NOTIFICATION_TYPE_ALERT_CREATED: ("alert-triangle", "red"),
    NOTIFICATION_TYPE_ALERT_RESOLVED: ("check-check", "green"),
    NOTIFICATION_TYPE_DELIVERY_ASSIGNED: ("package", "blue"),
    NOTIFICATION_TYPE_DELIVERY_COMPLETED: ("truck", "purple"),
    NOTIFICATION_TYPE_STOCK_LOW: ("alert-circle", "orange"),
}
DEFAULT_ICON = ("bell", "gray")

PRIORITY_COLORS = {"high": "red", "medium": "yellow", "low": "green"}


def badge_label(unread_count: int) -> str:
    """Text shown on the bell badge; empty when nothing is unread."""

    if unread_count <= 0:
        return ""
    if unread_count > BADGE_LIMIT:
        return f"{BADGE_LIMIT}+"
    return str(unread_count)


class NotificationBell:
    """Bell state mirrored from the publisher's snapshots.

    The bell never counts on its own: every mutation goes through the
    publisher and the resulting snapshot replaces the local list and unread
    count. Attach it for as long as the bell is visible, either with
    :meth:`attach`/:meth:`detach` or as a context manager.
    """

    def __init__(
        self,
        publisher: NotificationPublisher,
        *,
        navigate: Callable[[str], None] | None = None,
        preview_size: int = DEFAULT_PREVIEW_SIZE,
    ) -> None:
        self._publisher = publisher
        self._navigate = navigate
        self._preview_size = preview_size
        self._unsubscribe: Unsubscribe | None = None
        self._snapshot = NotificationSnapshot(notifications=(), unread_count=0)
        self.is_open = False
        self.show_all = False

    def __enter__(self) -> "NotificationBell":
        self.attach()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.detach()

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self) -> None:
        if self._unsubscribe is not None:
            return
        self._snapshot = self._publisher.snapshot()
        self._unsubscribe = self._publisher.watch(self._on_snapshot)

    def detach(self) -> None:
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None
        self.is_open = False

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return self._snapshot.notifications

    @property
    def unread_count(self) -> int:
        return self._snapshot.unread_count

    @property
    def badge_label(self) -> str:
        return badge_label(self.unread_count)

    @property
    def displayed_notifications(self) -> tuple[Notification, ...]:
        if self.show_all:
            return self.notifications
        return self.notifications[: self._preview_size]

    @property
    def has_more(self) -> bool:
        return len(self.notifications) > self._preview_size

    @property
    def footer_label(self) -> str | None:
        if not self.has_more:
            return None
        if self.show_all:
            return "Show less"
        return f"View all {len(self.notifications)} notifications"

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def close(self) -> None:
        self.is_open = False

    def toggle_show_all(self) -> None:
        self.show_all = not self.show_all

    def activate(self, notification_id: str) -> str | None:
        """Mark a notification as read and follow its link, if it has one.

        Returns the URL navigated to, or ``None``.
        """

        notification = self._find(notification_id)
        if notification is None:
            return None

        self._publisher.mark_as_read(notification_id)
        if not notification.action_url:
            return None

        if self._navigate is not None:
            self._navigate(notification.action_url)
        self.close()
        return notification.action_url

    def mark_all_as_read(self) -> None:
        self._publisher.mark_all_as_read()

    def render_item(
        self, notification: Notification, *, now: datetime | None = None
    ) -> dict[str, Any]:
        """Return the display attributes for one row of the dropdown."""

        icon, color = NOTIFICATION_ICONS.get(notification.type, DEFAULT_ICON)
        return {
            "id": notification.id,
            "title": notification.title,
            "message": notification.message,
            "icon": icon,
            "icon_color": color,
            "priority_indicator": None
            if notification.read
            else PRIORITY_COLORS.get(notification.priority, "gray"),
            "highlighted": not notification.read,
            "relative_time": format_relative_time(notification.timestamp, now=now),
            "hint": "Click to view" if notification.action_url else None,
        }

    def render(self, *, now: datetime | None = None) -> dict[str, Any]:
        """Return the full panel state, ready to be serialized."""

        return {
            "is_open": self.is_open,
            "badge": self.badge_label,
            "unread_count": self.unread_count,
            "can_mark_all_read": self.unread_count > 0,
            "empty": not self.notifications,
            "items": [self.render_item(n, now=now) for n in self.displayed_notifications],
            "footer": self.footer_label,
        }

    def _find(self, notification_id: str) -> Notification | None:
        for notification in self.notifications:
            if notification.id == notification_id:
                return notification
        return self._publisher.get(notification_id)

    def _on_snapshot(self, snapshot: NotificationSnapshot) -> None:
        self._snapshot = snapshot


__all__ = [
    "NotificationBell",
    "badge_label",
    "NOTIFICATION_ICONS",
    "PRIORITY_COLORS",
    "DEFAULT_PREVIEW_SIZE",
]
