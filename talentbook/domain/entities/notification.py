"""Domain entity representing a user notification and its typed payloads."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Union

from talentbook.domain.errors import ValidationError


class NotificationType(str, Enum):
    """Kinds of domain events that produce a notification."""

    BOOKING_REQUEST = "booking_request"
    BOOKING_ACCEPTED = "booking_accepted"
    BOOKING_DECLINED = "booking_declined"
    CONTRACT_CREATED = "contract_created"
    CONTRACT_SIGNED = "contract_signed"
    TASK_ASSIGNED = "task_assigned"
    TALENT_APPROVED = "talent_approved"
    SYSTEM_ANNOUNCEMENT = "system_announcement"


@dataclass(frozen=True)
class BookingRequestData:
    booking_id: str


@dataclass(frozen=True)
class BookingAcceptedData:
    booking_id: str
    booking_talent_id: str


@dataclass(frozen=True)
class BookingDeclinedData:
    booking_id: str
    booking_talent_id: str


@dataclass(frozen=True)
class ContractCreatedData:
    contract_id: str


@dataclass(frozen=True)
class ContractSignedData:
    contract_id: str


@dataclass(frozen=True)
class TaskAssignedData:
    task_id: str


@dataclass(frozen=True)
class TalentApprovedData:
    pass


@dataclass(frozen=True)
class AnnouncementData:
    announcement_id: str | None = None


NotificationData = Union[
    BookingRequestData,
    BookingAcceptedData,
    BookingDeclinedData,
    ContractCreatedData,
    ContractSignedData,
    TaskAssignedData,
    TalentApprovedData,
    AnnouncementData,
]

PAYLOAD_TYPES: dict[NotificationType, type] = {
    NotificationType.BOOKING_REQUEST: BookingRequestData,
    NotificationType.BOOKING_ACCEPTED: BookingAcceptedData,
    NotificationType.BOOKING_DECLINED: BookingDeclinedData,
    NotificationType.CONTRACT_CREATED: ContractCreatedData,
    NotificationType.CONTRACT_SIGNED: ContractSignedData,
    NotificationType.TASK_ASSIGNED: TaskAssignedData,
    NotificationType.TALENT_APPROVED: TalentApprovedData,
    NotificationType.SYSTEM_ANNOUNCEMENT: AnnouncementData,
}


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def payload_to_dict(payload: NotificationData) -> dict[str, Any]:
    """Return the JSON representation of ``payload`` using camelCase keys.

    Optional fields left as ``None`` are omitted so the stored blob only carries
    identifiers the UI can actually link to.
    """

    result: dict[str, Any] = {}
    for item in fields(payload):
        value = getattr(payload, item.name)
        if value is not None:
            result[_camel_case(item.name)] = value
    return result


def payload_from_dict(
    notification_type: NotificationType | str, data: dict[str, Any] | None
) -> NotificationData:
    """Rebuild the typed payload for ``notification_type`` from stored JSON."""

    try:
        kind = NotificationType(notification_type)
    except ValueError as exc:
        raise ValidationError(f"Unknown notification type: {notification_type!r}") from exc

    payload_type = PAYLOAD_TYPES[kind]
    data = data or {}
    values: dict[str, Any] = {}
    for item in fields(payload_type):
        key = _camel_case(item.name)
        if key in data:
            values[item.name] = data[key]
        elif item.name in data:
            values[item.name] = data[item.name]
    try:
        return payload_type(**values)
    except TypeError as exc:
        msg = f"Payload for {kind.value} notifications is incomplete: {data!r}"
        raise ValidationError(msg) from exc


def ensure_payload_matches(
    notification_type: NotificationType, payload: NotificationData
) -> None:
    """Raise ``ValidationError`` if ``payload`` is not the shape ``notification_type`` expects."""

    expected = PAYLOAD_TYPES[notification_type]
    if not isinstance(payload, expected):
        msg = (
            f"{notification_type.value} notifications carry {expected.__name__}, "
            f"got {type(payload).__name__}"
        )
        raise ValidationError(msg)


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: str | None
    user_id: str
    type: NotificationType
    title: str
    message: str
    data: NotificationData
    action_url: str | None = None
    read: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


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
]
