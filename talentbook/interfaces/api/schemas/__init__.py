"""Pydantic schemas exposed by the HTTP interface."""

from .auth import Token
from .notification import (
    AnnouncementCreate,
    MarkAllReadResult,
    NotificationRead,
    PurgeResult,
    UnreadCount,
)
from .user import TalentApprovalRequest, UserRead

__all__ = [
    "AnnouncementCreate",
    "MarkAllReadResult",
    "NotificationRead",
    "PurgeResult",
    "TalentApprovalRequest",
    "Token",
    "UnreadCount",
    "UserRead",
]
