"""Listing and read-state operations, always scoped to the calling user."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from talentbook.config import get_settings
from talentbook.domain.entities import Notification, User
from talentbook.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session,
    user: User,
    *,
    limit: int | None = None,
    unread_only: bool = False,
) -> Sequence[Notification]:
    """Return ``user``'s notifications, newest first."""

    if limit is None:
        limit = get_settings().notification_list_limit
    return NotificationRepository(session).list_for_user(
        user.id, limit=limit, unread_only=unread_only
    )


def count_unread(session: Session, user: User) -> int:
    return NotificationRepository(session).unread_count(user.id)


def mark_notification_read(session: Session, user: User, notification_id: str) -> bool:
    """Mark one of ``user``'s notifications as read.

    Unknown ids and ids owned by someone else are ignored.
    """

    return NotificationRepository(session).mark_read(notification_id, user.id)


def mark_all_notifications_read(session: Session, user: User) -> int:
    return NotificationRepository(session).mark_all_read(user.id)


__all__ = [
    "count_unread",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
