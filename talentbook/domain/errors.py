"""Error taxonomy raised by the notification workflow."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for notification workflow failures."""


class ValidationError(NotificationError, ValueError):
    """Raised when a trigger or operation receives incomplete or malformed input."""


class PersistenceError(NotificationError):
    """Raised when the store is unreachable or rejects a read or write."""


__all__ = ["NotificationError", "PersistenceError", "ValidationError"]
