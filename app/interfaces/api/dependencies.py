"""FastAPI dependency utilities."""

from fastapi import HTTPException, Request, status
from starlette.requests import HTTPConnection

from app.infrastructure.notifications import NotificationPublisher


def resolve_notification_publisher(connection: HTTPConnection) -> NotificationPublisher:
    """Return the publisher created by the application lifespan."""

    publisher = getattr(connection.app.state, "notification_publisher", None)
    if publisher is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification service is not running",
        )
    return publisher


def get_notification_publisher(request: Request) -> NotificationPublisher:
    return resolve_notification_publisher(request)
