"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from talentbook.domain.entities import Notification, NotificationType, payload_to_dict


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)
    action_url: str | None = None
    read: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id or "",
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            data=payload_to_dict(notification.data),
            action_url=notification.action_url,
            read=notification.read,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )


class UnreadCount(BaseModel):
    count: int


class MarkAllReadResult(BaseModel):
    updated: int


class AnnouncementCreate(CamelModel):
    """Body of an admin broadcast; without explicit recipients every user of ``roles`` is addressed."""

    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    recipient_ids: list[str] | None = None
    roles: list[str] = Field(default_factory=lambda: ["talent", "client"])
    announcement_id: str | None = None


class PurgeResult(BaseModel):
    removed: int | None = Field(
        ..., description="Rows deleted, or null when another sweep was already running"
    )
    days: int


__all__ = [
    "AnnouncementCreate",
    "MarkAllReadResult",
    "NotificationRead",
    "PurgeResult",
    "UnreadCount",
]
