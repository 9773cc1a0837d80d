"""Translate hosted-database row changes into dashboard notifications."""

from __future__ import annotations

import logging
from typing import Any

from app.config import get_settings
from app.domain.entities import CHANGE_INSERT, CHANGE_UPDATE, DatabaseChange, Notification
from app.infrastructure.notifications import NotificationPublisher

from .events import (
    notify_alert_created,
    notify_alert_resolved,
    notify_delivery_assigned,
    notify_delivery_completed,
    notify_stock_low,
    notify_user_registered,
)

logger = logging.getLogger(__name__)

_ALERT_RESOLVED_STATUSES = {"resolved"}
_DELIVERY_COMPLETED_STATUSES = {"delivered", "completed"}


def handle_database_change(
    publisher: NotificationPublisher, change: DatabaseChange
) -> Notification | None:
    """Publish the notification matching ``change``, if any.

    Recognized changes:

    * ``users`` INSERT: a new app user registered.
    * ``alerts`` INSERT: a new alert; UPDATE into ``resolved``: alert resolved.
    * ``deliveries`` INSERT: delivery assigned; UPDATE into a completed
      status: delivery completed.
    * ``inventory`` INSERT at or below the item threshold, or UPDATE that
      brings the quantity down to it: stock is low.

    Anything else is ignored and ``None`` is returned.
    """

    table = change.table.strip().lower()
    event_type = change.event_type.strip().upper()
    record = change.record or {}

    if table == "users" and event_type == CHANGE_INSERT:
        return notify_user_registered(
            publisher,
            user_id=_optional_str(record.get("id")),
            full_name=record.get("full_name"),
        )

    if table == "alerts":
        if event_type == CHANGE_INSERT:
            return notify_alert_created(
                publisher,
                woman_name=record.get("woman_name"),
                alert_type=str(record.get("type") or "Alert"),
                severity=record.get("severity"),
                alert_id=_optional_str(record.get("id")),
            )
        if event_type == CHANGE_UPDATE and _entered_status(
            change, _ALERT_RESOLVED_STATUSES
        ):
            return notify_alert_resolved(
                publisher,
                woman_name=record.get("woman_name"),
                alert_type=str(record.get("type") or "Alert"),
                alert_id=_optional_str(record.get("id")),
            )

    if table == "deliveries":
        if event_type == CHANGE_INSERT:
            return notify_delivery_assigned(
                publisher,
                woman_name=record.get("woman_name"),
                delivery_id=_optional_str(record.get("id")),
            )
        if event_type == CHANGE_UPDATE and _entered_status(
            change, _DELIVERY_COMPLETED_STATUSES
        ):
            return notify_delivery_completed(
                publisher,
                woman_name=record.get("woman_name"),
                delivery_id=_optional_str(record.get("id")),
            )

    if table == "inventory" and event_type in {CHANGE_INSERT, CHANGE_UPDATE}:
        quantity = _optional_int(record.get("quantity"))
        if quantity is None:
            return None
        # A threshold of 0 counts as unset.
        threshold = (
            _optional_int(record.get("threshold")) or get_settings().stock_low_threshold
        )
        if event_type == CHANGE_UPDATE and _was_low_stock(change, threshold):
            logger.debug("Inventory row already at or below threshold %s", threshold)
            return None
        return notify_stock_low(
            publisher,
            item_name=str(record.get("item_name") or record.get("name") or "Item"),
            quantity=quantity,
            threshold=threshold,
        )

    logger.debug("Ignoring %s change on table '%s'", event_type, table)
    return None


def _entered_status(change: DatabaseChange, statuses: set[str]) -> bool:
    """Return whether the row moved into one of ``statuses`` with this change."""

    new_status = str(change.record.get("status") or "").lower()
    old_status = str((change.old_record or {}).get("status") or "").lower()
    return new_status in statuses and old_status not in statuses


def _was_low_stock(change: DatabaseChange, threshold: int) -> bool:
    """Return whether the previous row was already at or below ``threshold``."""

    old_quantity = _optional_int((change.old_record or {}).get("quantity"))
    return old_quantity is not None and old_quantity <= threshold


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _optional_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


__all__ = ["handle_database_change"]
