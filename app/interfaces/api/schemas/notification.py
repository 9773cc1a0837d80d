"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

NotificationType = Literal[
    "user_registered",
    "alert_created",
    "alert_resolved",
    "delivery_assigned",
    "delivery_completed",
    "stock_low",
    "other",
]
NotificationPriority = Literal["high", "medium", "low"]


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    type: NotificationType
    title: str
    message: str
    priority: NotificationPriority
    timestamp: datetime
    read: bool
    action_url: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class NotificationCreate(BaseModel):
    """Payload used to publish an ad-hoc notification."""

    type: NotificationType = "other"
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    priority: NotificationPriority = "medium"
    action_url: str | None = Field(
        default=None, description="Dashboard route opened when the notification is activated"
    )
    user_id: str | None = None
    user_name: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)


class NotificationListResponse(BaseModel):
    """Retained notifications, newest first, plus the unread counter."""

    notifications: list[NotificationRead]
    unread_count: int


class UnreadCountRead(BaseModel):
    unread_count: int


class DatabaseChangeRequest(BaseModel):
    """Row change forwarded by the hosted database webhook."""

    table: str = Field(..., min_length=1)
    type: Literal["INSERT", "UPDATE", "DELETE"]
    record: dict[str, Any] = Field(default_factory=dict)
    old_record: dict[str, Any] = Field(default_factory=dict)


__all__ = [
    "NotificationRead",
    "NotificationCreate",
    "NotificationListResponse",
    "UnreadCountRead",
    "DatabaseChangeRequest",
    "NotificationType",
    "NotificationPriority",
]
