"""Repository implementations for infrastructure layer."""

from .notification_repository import (
    DEFAULT_LIST_LIMIT,
    DEFAULT_RETENTION_DAYS,
    BulkCreateMode,
    NotificationRepository,
)
from .user_repository import UserRepository

__all__ = [
    "BulkCreateMode",
    "DEFAULT_LIST_LIMIT",
    "DEFAULT_RETENTION_DAYS",
    "NotificationRepository",
    "UserRepository",
]
