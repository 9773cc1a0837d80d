"""Process-wide notification publisher and authoritative notification state."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable

from app.domain.entities import Notification, NotificationSnapshot

from .store import DEFAULT_CAPACITY, NotificationSnapshotStore

logger = logging.getLogger(__name__)

NotificationCallback = Callable[[Notification], None]
SnapshotCallback = Callable[[NotificationSnapshot], None]
Unsubscribe = Callable[[], None]


class NotificationPublisher:
    """Fan notifications out to subscribers and own the retained list.

    The publisher keeps the newest ``capacity`` notifications, newest first,
    together with the unread counter. The counter is recomputed from the list
    after every mutation and the full list is written to the snapshot store
    before any subscriber runs.

    Subscribers are called synchronously, in subscription order, and their
    exceptions propagate to the caller of :meth:`publish`, which stops
    delivery to the remaining subscribers for that notification.
    """

    def __init__(
        self,
        store: NotificationSnapshotStore,
        *,
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be a positive integer")
        self._store = store
        self._capacity = capacity
        self._notifications: list[Notification] = []
        self._unread_count = 0
        self._subscribers: list[NotificationCallback] = []
        self._watchers: list[SnapshotCallback] = []
        self._lock = threading.RLock()
        self._started = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        """Load the persisted snapshot. Calling it again is a no-op."""

        with self._lock:
            if self._started:
                return
            self._notifications = self._store.load()[: self._capacity]
            self._reconcile()
            self._started = True
            logger.info(
                "Notification publisher started with %s notifications (%s unread)",
                len(self._notifications),
                self._unread_count,
            )

    def close(self) -> None:
        """Drop every subscriber and watcher; retained state is left as is."""

        with self._lock:
            self._subscribers.clear()
            self._watchers.clear()
            self._started = False
        logger.info("Notification publisher closed")

    def subscribe(self, callback: NotificationCallback) -> Unsubscribe:
        """Register ``callback`` for every published notification.

        Returns a function that removes the registration; calling it more than
        once has no effect.
        """

        with self._lock:
            self._subscribers.append(callback)
            logger.debug("Subscriber added, total %s", len(self._subscribers))
        return self._make_disposer(self._subscribers, callback)

    def watch(self, callback: SnapshotCallback) -> Unsubscribe:
        """Register ``callback`` to receive the full state after each mutation."""

        with self._lock:
            self._watchers.append(callback)
        return self._make_disposer(self._watchers, callback)

    def publish(self, notification: Notification) -> None:
        """Store ``notification`` at the head of the list and fan it out."""

        with self._lock:
            retained = [n for n in self._notifications if n.id != notification.id]
            retained.insert(0, notification)
            evicted = retained[self._capacity :]
            self._commit(retained[: self._capacity])
            subscribers = list(self._subscribers)
            snapshot = self._snapshot()

        if evicted:
            logger.debug("Evicted %s notification(s) over capacity", len(evicted))
        logger.debug(
            "Publishing notification %s to %s subscriber(s)",
            notification.id,
            len(subscribers),
        )
        for callback in subscribers:
            callback(notification)
        self._notify_watchers(snapshot)

    def mark_as_read(self, notification_id: str) -> bool:
        """Mark one notification as read; return whether anything changed."""

        with self._lock:
            for index, notification in enumerate(self._notifications):
                if notification.id == notification_id:
                    break
            else:
                return False
            if notification.read:
                return False
            updated = list(self._notifications)
            updated[index] = replace(notification, read=True)
            self._commit(updated)
            snapshot = self._snapshot()

        self._notify_watchers(snapshot)
        return True

    def mark_all_as_read(self) -> int:
        """Mark every retained notification as read; return how many changed."""

        with self._lock:
            changed = self._unread_count
            if changed:
                self._commit(
                    [n if n.read else replace(n, read=True) for n in self._notifications]
                )
            snapshot = self._snapshot()

        if changed:
            self._notify_watchers(snapshot)
        return changed

    def clear_all(self) -> None:
        """Remove every retained notification and the persisted snapshot."""

        with self._lock:
            self._store.clear()
            self._notifications = []
            self._reconcile()
            snapshot = self._snapshot()

        logger.info("Cleared all notifications")
        self._notify_watchers(snapshot)

    def get_unread_count(self) -> int:
        return self._unread_count

    def get(self, notification_id: str) -> Notification | None:
        with self._lock:
            for notification in self._notifications:
                if notification.id == notification_id:
                    return notification
        return None

    def list_notifications(
        self,
        *,
        unread_only: bool = False,
        notification_type: str | None = None,
    ) -> list[Notification]:
        """Return retained notifications, newest first, optionally filtered."""

        with self._lock:
            notifications = list(self._notifications)
        if unread_only:
            notifications = [n for n in notifications if not n.read]
        if notification_type is not None:
            notifications = [n for n in notifications if n.type == notification_type]
        return notifications

    def snapshot(self) -> NotificationSnapshot:
        with self._lock:
            return self._snapshot()

    def _commit(self, notifications: list[Notification]) -> None:
        """Persist ``notifications`` and only then make them the retained list."""

        self._store.save(notifications)
        self._notifications = notifications
        self._reconcile()

    def _reconcile(self) -> None:
        self._unread_count = sum(1 for n in self._notifications if not n.read)

    def _snapshot(self) -> NotificationSnapshot:
        return NotificationSnapshot(
            notifications=tuple(self._notifications),
            unread_count=self._unread_count,
        )

    def _notify_watchers(self, snapshot: NotificationSnapshot) -> None:
        with self._lock:
            watchers = list(self._watchers)
        for callback in watchers:
            callback(snapshot)

    def _make_disposer(self, registry: list, callback: Callable) -> Unsubscribe:
        def unsubscribe() -> None:
            with self._lock:
                for index, registered in enumerate(registry):
                    if registered is callback:
                        del registry[index]
                        break

        return unsubscribe


__all__ = [
    "NotificationPublisher",
    "NotificationCallback",
    "SnapshotCallback",
    "Unsubscribe",
]
