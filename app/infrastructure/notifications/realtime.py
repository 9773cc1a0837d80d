"""Forward published notifications to connected websocket clients."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from app.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager
from .store import serialize_notification

logger = logging.getLogger(__name__)


class WebsocketNotificationRelay:
    """Publisher subscriber that schedules websocket delivery of notifications.

    Publishing is synchronous, so the relay never awaits the send itself: on
    the event loop it creates a task, and from a worker thread it hands the
    coroutine back to the loop through ``anyio.from_thread``.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def __call__(self, notification: Notification) -> None:
        if not self._manager.connection_count:
            return

        message = {"type": "notification", "data": serialize_notification(notification)}
        self._schedule_send(message)

    def _schedule_send(self, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self._manager.broadcast, message)
        else:
            task = loop.create_task(self._manager.broadcast(message))
            self._pending.add(task)
            task.add_done_callback(self._on_send_done)

    def _on_send_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Websocket notification broadcast failed", exc_info=exc)


websocket_notification_relay = WebsocketNotificationRelay(notification_manager)


__all__ = ["WebsocketNotificationRelay", "websocket_notification_relay"]
