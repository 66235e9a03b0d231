"""ORM models used by the application infrastructure."""

from .user import UserModel
from .notification import NotificationModel

__all__ = ["NotificationModel", "UserModel"]
