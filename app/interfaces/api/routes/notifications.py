"""Endpoints and websocket handler for dashboard notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)

from app.application.use_cases.notifications import (
    handle_database_change,
    new_notification_id,
)
from app.domain.entities import DatabaseChange, Notification
from app.infrastructure.notifications import (
    NotificationPublisher,
    notification_manager,
    serialize_notifications,
)
from app.interfaces.api.dependencies import (
    get_notification_publisher,
    resolve_notification_publisher,
)
from app.interfaces.api.schemas import (
    DatabaseChangeRequest,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
    NotificationType,
    UnreadCountRead,
)
from app.utils import now_in_app_timezone

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


def _get_or_404(publisher: NotificationPublisher, notification_id: str) -> Notification:
    notification = publisher.get(notification_id)
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )
    return notification


@router.get("/", response_model=NotificationListResponse)
def list_notifications(
    unread_only: bool = Query(False),
    notification_type: NotificationType | None = Query(None, alias="type"),
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> NotificationListResponse:
    """Return the retained notifications, newest first."""

    notifications = publisher.list_notifications(
        unread_only=unread_only, notification_type=notification_type
    )
    return NotificationListResponse(
        notifications=[_notification_to_schema(n) for n in notifications],
        unread_count=publisher.get_unread_count(),
    )


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> UnreadCountRead:
    return UnreadCountRead(unread_count=publisher.get_unread_count())


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def publish_notification(
    payload: NotificationCreate,
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> NotificationRead:
    """Publish an ad-hoc notification to every connected dashboard."""

    notification = Notification(
        id=new_notification_id(payload.type.replace("_", "-")),
        type=payload.type,
        title=payload.title,
        message=payload.message,
        priority=payload.priority,
        timestamp=now_in_app_timezone(),
        read=False,
        action_url=payload.action_url,
        user_id=payload.user_id,
        user_name=payload.user_name,
        data=payload.data,
    )
    publisher.publish(notification)
    return _notification_to_schema(notification)


@router.post("/read-all", response_model=UnreadCountRead)
def mark_all_notifications_as_read(
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> UnreadCountRead:
    changed = publisher.mark_all_as_read()
    logger.info("Marked %s notification(s) as read", changed)
    return UnreadCountRead(unread_count=publisher.get_unread_count())


@router.post(
    "/events",
    response_model=NotificationRead | None,
    status_code=status.HTTP_202_ACCEPTED,
)
def receive_database_change(
    payload: DatabaseChangeRequest,
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> NotificationRead | None:
    """Turn a row change reported by the database webhook into a notification."""

    change = DatabaseChange(
        table=payload.table,
        event_type=payload.type,
        record=payload.record,
        old_record=payload.old_record,
    )
    notification = handle_database_change(publisher, change)
    if notification is None:
        return None
    return _notification_to_schema(notification)


@router.get("/{notification_id}", response_model=NotificationRead)
def get_notification(
    notification_id: str,
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> NotificationRead:
    return _notification_to_schema(_get_or_404(publisher, notification_id))


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_as_read(
    notification_id: str,
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> NotificationRead:
    """Mark a single notification as read. Repeated calls are harmless."""

    _get_or_404(publisher, notification_id)
    publisher.mark_as_read(notification_id)
    return _notification_to_schema(_get_or_404(publisher, notification_id))


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def clear_notifications(
    publisher: NotificationPublisher = Depends(get_notification_publisher),
) -> Response:
    publisher.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the dashboard."""

    try:
        publisher = resolve_notification_publisher(websocket)
    except HTTPException:
        await websocket.close(code=1011)
        return

    await notification_manager.connect(websocket)
    try:
        snapshot = publisher.snapshot()
        await websocket.send_json(
            {
                "type": "init",
                "data": {
                    "notifications": serialize_notifications(snapshot.notifications),
                    "unread_count": snapshot.unread_count,
                },
            }
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list):
                    for notification_id in ids:
                        publisher.mark_as_read(str(notification_id))
                await websocket.send_json(
                    {
                        "type": "unread-count",
                        "data": {"unread_count": publisher.get_unread_count()},
                    }
                )
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(websocket)
    except Exception:  # pragma: no cover - connection cleanup before propagating
        notification_manager.disconnect(websocket)
        raise
