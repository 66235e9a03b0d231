"""Domain entity representing a marketplace user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_TALENT = "talent"
ROLE_CLIENT = "client"
USER_ROLES = (ROLE_ADMIN, ROLE_TALENT, ROLE_CLIENT)

STATUS_ACTIVE = "active"
STATUS_PENDING = "pending"
STATUS_SUSPENDED = "suspended"
USER_STATUSES = (STATUS_ACTIVE, STATUS_PENDING, STATUS_SUSPENDED)


@dataclass
class User:
    """Core attributes describing an application user."""

    id: str | None
    role: str
    name: str
    email: str
    password: str
    status: str = STATUS_ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role.lower() == role.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    @property
    def is_active(self) -> bool:
        return self.status != STATUS_SUSPENDED


__all__ = [
    "ROLE_ADMIN",
    "ROLE_CLIENT",
    "ROLE_TALENT",
    "STATUS_ACTIVE",
    "STATUS_PENDING",
    "STATUS_SUSPENDED",
    "USER_ROLES",
    "USER_STATUSES",
    "User",
]
