"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime, timedelta
from enum import Enum

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talentbook.domain.entities import (
    Notification,
    NotificationType,
    ensure_payload_matches,
    payload_from_dict,
    payload_to_dict,
)
from talentbook.domain.errors import PersistenceError, ValidationError
from talentbook.infrastructure.models import NotificationModel, UserModel
from talentbook.utils import (
    to_storage_datetime,
    from_storage_datetime,
    now_in_app_timezone,
)

DEFAULT_LIST_LIMIT = 20
DEFAULT_RETENTION_DAYS = 30

Clock = Callable[[], datetime]


class BulkCreateMode(str, Enum):
    """How :meth:`NotificationRepository.create_many` treats unknown recipients."""

    ATOMIC = "atomic"
    PARTIAL = "partial"


class NotificationRepository:
    """Provide the notification store operations on top of a SQLAlchemy session.

    Every failure reported by the database is surfaced as
    :class:`PersistenceError`; nothing is retried here. Writes run inside a
    SAVEPOINT, so a failed write leaves whatever the caller already did in the
    same session untouched; a successful write commits the session.
    """

    def __init__(
        self,
        session: Session,
        *,
        clock: Clock = now_in_app_timezone,
        logger: logging.Logger | None = None,
    ) -> None:
        self.session = session
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)

    def create(self, notification: Notification) -> Notification:
        with self._translate_errors("look up the recipient"):
            known = self._existing_user_ids({notification.user_id})
        if notification.user_id not in known:
            msg = f"Recipient {notification.user_id!r} does not exist"
            raise PersistenceError(msg)

        model = self._build_model(notification, self._now())
        with self._write("create a notification"):
            self.session.add(model)
        with self._translate_errors("reload a notification"):
            saved = self._to_entity(model)
        self.logger.debug(
            "Stored %s notification %s for user %s", saved.type.value, saved.id, saved.user_id
        )
        return saved

    def create_many(
        self,
        notifications: Iterable[Notification],
        *,
        mode: BulkCreateMode | str = BulkCreateMode.ATOMIC,
    ) -> list[Notification]:
        items = list(notifications)
        if not items:
            return []

        mode = BulkCreateMode(mode)
        with self._translate_errors("look up recipients"):
            known = self._existing_user_ids({item.user_id for item in items})
        missing = sorted({item.user_id for item in items} - known)
        if missing:
            if mode is BulkCreateMode.ATOMIC:
                msg = f"Unknown recipients in batch: {', '.join(missing)}"
                raise PersistenceError(msg)
            self.logger.warning(
                "Skipping %d notification(s) addressed to unknown recipients: %s",
                sum(1 for item in items if item.user_id not in known),
                ", ".join(missing),
            )
            items = [item for item in items if item.user_id in known]
            if not items:
                return []

        now = self._now()
        models = [self._build_model(item, now) for item in items]
        with self._write("create notifications"):
            self.session.add_all(models)
        with self._translate_errors("reload notifications"):
            saved = [self._to_entity(model) for model in models]
        self.logger.debug("Stored %d notifications in one batch", len(saved))
        return saved

    def get(self, notification_id: str) -> Notification | None:
        with self._translate_errors("load a notification"):
            stmt = select(NotificationModel).where(NotificationModel.id == notification_id)
            model = self.session.execute(stmt).scalar_one_or_none()
            return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int | None = DEFAULT_LIST_LIMIT,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        if limit is not None and limit < 0:
            raise ValidationError("limit must not be negative")

        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.read.is_(False))
        stmt = stmt.order_by(
            NotificationModel.created_at.desc(), NotificationModel.seq.desc()
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._translate_errors("list notifications"):
            models = self.session.execute(stmt).scalars().all()
            return [self._to_entity(model) for model in models]

    def mark_read(self, notification_id: str, user_id: str) -> bool:
        """Flag the notification as read when it belongs to ``user_id``.

        Returns ``False`` when no row matched; that is not an error.
        """

        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .values(read=True, updated_at=self._now())
        )
        with self._write("mark a notification as read"):
            result = self.session.execute(stmt)
        return result.rowcount > 0

    def mark_all_read(self, user_id: str) -> int:
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.user_id == user_id,
                NotificationModel.read.is_(False),
            )
            .values(read=True, updated_at=self._now())
        )
        with self._write("mark notifications as read"):
            result = self.session.execute(stmt)
        return result.rowcount or 0

    def unread_count(self, user_id: str) -> int:
        stmt = select(func.count(NotificationModel.id)).where(
            NotificationModel.user_id == user_id,
            NotificationModel.read.is_(False),
        )
        with self._translate_errors("count unread notifications"):
            return int(self.session.execute(stmt).scalar_one() or 0)

    def delete_older_than(self, days: int = DEFAULT_RETENTION_DAYS) -> int:
        if days < 0:
            raise ValidationError("days must not be negative")

        cutoff = to_storage_datetime(self.clock() - timedelta(days=days))
        stmt = delete(NotificationModel).where(NotificationModel.created_at < cutoff)
        with self._write("delete stale notifications"):
            result = self.session.execute(stmt)
        removed = result.rowcount or 0
        self.logger.info("Removed %d notification(s) created before %s", removed, cutoff)
        return removed

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.logger.error("Notification store failed to %s: %s", action, exc)
            raise PersistenceError(f"Could not {action}") from exc

    @contextmanager
    def _write(self, action: str) -> Iterator[None]:
        with self._translate_errors(action):
            with self.session.begin_nested():
                yield
            self.session.commit()

    def _existing_user_ids(self, user_ids: set[str]) -> set[str]:
        if not user_ids:
            return set()
        stmt = select(UserModel.id).where(UserModel.id.in_(user_ids))
        return set(self.session.execute(stmt).scalars().all())

    def _now(self) -> datetime:
        return to_storage_datetime(self.clock())

    @staticmethod
    def _build_model(notification: Notification, now: datetime) -> NotificationModel:
        ensure_payload_matches(notification.type, notification.data)
        return NotificationModel(
            user_id=notification.user_id,
            type=notification.type.value,
            title=notification.title,
            message=notification.message,
            data=payload_to_dict(notification.data),
            action_url=notification.action_url,
            read=False,
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        notification_type = NotificationType(model.type)
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=notification_type,
            title=model.title,
            message=model.message,
            data=payload_from_dict(notification_type, model.data),
            action_url=model.action_url,
            read=bool(model.read),
            created_at=from_storage_datetime(model.created_at),
            updated_at=from_storage_datetime(model.updated_at),
        )


__all__ = [
    "BulkCreateMode",
    "DEFAULT_LIST_LIMIT",
    "DEFAULT_RETENTION_DAYS",
    "NotificationRepository",
]
