"""Construction and teardown of the process-wide notification publisher."""

from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.infrastructure.storage import KeyValueStorage, SqlKeyValueStorage

from .publisher import NotificationPublisher, Unsubscribe
from .realtime import websocket_notification_relay
from .store import NotificationSnapshotStore

logger = logging.getLogger(__name__)


def create_notification_publisher(
    *,
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
    session_factory: Callable[[], Session] | None = None,
) -> NotificationPublisher:
    """Build a publisher backed by the configured snapshot slot.

    ``storage`` wins over ``session_factory``; without either, the shared
    ``SessionLocal`` factory is used.
    """

    settings = settings or get_settings()
    if storage is None:
        if session_factory is None:
            from app.infrastructure.database import SessionLocal

            session_factory = SessionLocal
        storage = SqlKeyValueStorage(session_factory)

    store = NotificationSnapshotStore(
        storage,
        key=settings.notification_storage_key,
        capacity=settings.notification_capacity,
    )
    return NotificationPublisher(store, capacity=settings.notification_capacity)


def start_notification_publisher(publisher: NotificationPublisher) -> Unsubscribe:
    """Load persisted state and attach the websocket relay.

    Returns the relay disposer so the caller can detach it at shutdown.
    """

    publisher.start()
    return publisher.subscribe(websocket_notification_relay)


def shutdown_notification_publisher(
    publisher: NotificationPublisher, detach_relay: Unsubscribe | None = None
) -> None:
    if detach_relay is not None:
        detach_relay()
    publisher.close()


__all__ = [
    "create_notification_publisher",
    "start_notification_publisher",
    "shutdown_notification_publisher",
]
