"""Endpoints and websocket handler for the caller's own notifications."""

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
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session, sessionmaker

from talentbook.application.use_cases.notifications import (
    count_unread,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from talentbook.domain.entities import Notification, User
from talentbook.domain.errors import PersistenceError
from talentbook.infrastructure.database import get_db, get_session_factory
from talentbook.infrastructure.notifications import (
    notification_manager,
    serialize_notification,
)
from talentbook.interfaces.api.dependencies import (
    get_current_active_user,
    resolve_current_user,
)
from talentbook.interfaces.api.schemas import (
    MarkAllReadResult,
    NotificationRead,
    UnreadCount,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=list[NotificationRead])
def read_notifications(
    limit: int | None = Query(None, ge=1, le=100),
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications(
        db, current_user, limit=limit, unread_only=unread_only
    )
    return [NotificationRead.from_entity(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCount)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCount:
    """Return the badge count for the authenticated user."""

    return UnreadCount(count=count_unread(db, current_user))


@router.patch("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Mark one notification as read; unknown or foreign ids are ignored."""

    mark_notification_read(db, current_user, notification_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/read-all", response_model=MarkAllReadResult)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkAllReadResult:
    """Mark every notification of the authenticated user as read."""

    return MarkAllReadResult(updated=mark_all_notifications_read(db, current_user))


def _open_stream(
    session_factory: sessionmaker[Session], token: str
) -> tuple[User, list[Notification]]:
    """Authenticate the socket and load its unread backlog in a short-lived session."""

    with session_factory() as session:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
        return user, list(list_notifications(session, user, unread_only=True))


def _acknowledge(
    session_factory: sessionmaker[Session], user: User, notification_ids: list[str]
) -> None:
    with session_factory() as session:
        for notification_id in notification_ids:
            mark_notification_read(session, user, notification_id)


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    session_factory: sessionmaker[Session] = Depends(get_session_factory),
) -> None:
    """Websocket endpoint that streams notifications to the authenticated user.

    No database connection is held while the socket is idle: the backlog and
    every ``ack`` use their own session, run off the event loop.
    """

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    try:
        user, pending = await run_in_threadpool(_open_stream, session_factory, token)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    except PersistenceError:
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return

    await notification_manager.connect(user.id, websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification(n) for n in pending]}
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
            elif message_type == "ack":
                ids = message.get("ids", [])
                if not isinstance(ids, list):
                    continue
                ids = [item for item in ids if isinstance(item, str)]
                if not ids:
                    continue
                try:
                    await run_in_threadpool(_acknowledge, session_factory, user, ids)
                except PersistenceError:
                    logger.warning(
                        "Could not acknowledge %d notification(s) for user %s", len(ids), user.id
                    )
    except WebSocketDisconnect:
        logger.debug("Notification websocket closed for user %s", user.id)
    finally:
        notification_manager.disconnect(user.id, websocket)
