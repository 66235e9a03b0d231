"""Domain entities exposed by the application."""

from .notification import (
    PAYLOAD_TYPES,
    AnnouncementData,
    BookingAcceptedData,
    BookingDeclinedData,
    BookingRequestData,
    ContractCreatedData,
    ContractSignedData,
    Notification,
    NotificationData,
    NotificationType,
    TalentApprovedData,
    TaskAssignedData,
    ensure_payload_matches,
    payload_from_dict,
    payload_to_dict,
)
from .user import (
    ROLE_ADMIN,
    ROLE_CLIENT,
    ROLE_TALENT,
    STATUS_ACTIVE,
    STATUS_PENDING,
    STATUS_SUSPENDED,
    USER_ROLES,
    USER_STATUSES,
    User,
)

__all__ = [
    "AnnouncementData",
    "BookingAcceptedData",
    "BookingDeclinedData",
    "BookingRequestData",
    "ContractCreatedData",
    "ContractSignedData",
    "Notification",
    "NotificationData",
    "NotificationType",
    "PAYLOAD_TYPES",
    "TalentApprovedData",
    "TaskAssignedData",
    "ensure_payload_matches",
    "payload_from_dict",
    "payload_to_dict",
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
