from .notification import (
    DatabaseChangeRequest,
    NotificationCreate,
    NotificationListResponse,
    NotificationPriority,
    NotificationRead,
    NotificationType,
    UnreadCountRead,
)

__all__ = [
    "DatabaseChangeRequest",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationPriority",
    "NotificationRead",
    "NotificationType",
    "UnreadCountRead",
]
