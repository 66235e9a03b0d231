"""Workflow triggers that turn booking, contract and approval events into notifications.

Each trigger validates the event data handed in by the caller, composes the
title, message and action link, and writes exactly one notification for the
recipient (the announcement broadcast writes one per recipient in a single
batch). Blank values are rejected; anything else is used exactly as given.
Triggers never look up booking or contract state themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from sqlalchemy.orm import Session

from talentbook.config import get_settings
from talentbook.domain.entities import (
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
)
from talentbook.domain.errors import ValidationError
from talentbook.infrastructure.email import send_notification_email
from talentbook.infrastructure.notifications import dispatch_notification
from talentbook.infrastructure.repositories import (
    BulkCreateMode,
    NotificationRepository,
    UserRepository,
)
from talentbook.infrastructure.repositories.notification_repository import Clock
from talentbook.utils import now_in_app_timezone

EMAIL_MIRRORED_TYPES = frozenset(
    {
        NotificationType.BOOKING_REQUEST,
        NotificationType.CONTRACT_CREATED,
        NotificationType.TALENT_APPROVED,
        NotificationType.TASK_ASSIGNED,
    }
)

Publisher = Callable[[Notification], None]
Mailer = Callable[[str, Notification], bool]


def _require(**values: Any) -> None:
    """Raise ``ValidationError`` naming the first missing or blank value."""

    for name, value in values.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{name} is required")


class WorkflowNotifier:
    """Compose and persist the notifications emitted by domain events."""

    def __init__(
        self,
        session: Session,
        *,
        logger: logging.Logger | None = None,
        clock: Clock = now_in_app_timezone,
        publisher: Publisher = dispatch_notification,
        mailer: Mailer | None = send_notification_email,
    ) -> None:
        self.session = session
        self.logger = logger or logging.getLogger(__name__)
        self.publisher = publisher
        self.mailer = mailer
        self.repository = NotificationRepository(session, clock=clock, logger=self.logger)

    def booking_accepted(
        self,
        *,
        admin_id: str | None = None,
        talent_name: str | None = None,
        booking_title: str | None = None,
        booking_id: str | None = None,
        booking_talent_id: str | None = None,
    ) -> Notification:
        """Tell the admin who owns the booking that a talent accepted it."""

        _require(
            admin_id=admin_id,
            talent_name=talent_name,
            booking_title=booking_title,
            booking_id=booking_id,
            booking_talent_id=booking_talent_id,
        )
        return self._persist(
            user_id=admin_id,
            notification_type=NotificationType.BOOKING_ACCEPTED,
            title=f"{talent_name} accepted booking",
            message=(
                f'{talent_name} has accepted the booking "{booking_title}". '
                "You can now create a contract."
            ),
            data=BookingAcceptedData(
                booking_id=booking_id, booking_talent_id=booking_talent_id
            ),
            action_url=f"/admin/contracts?booking={booking_id}&talent={booking_talent_id}",
        )

    def booking_declined(
        self,
        *,
        admin_id: str | None = None,
        talent_name: str | None = None,
        booking_title: str | None = None,
        booking_id: str | None = None,
        booking_talent_id: str | None = None,
    ) -> Notification:
        """Tell the admin who owns the booking that a talent declined it."""

        _require(
            admin_id=admin_id,
            talent_name=talent_name,
            booking_title=booking_title,
            booking_id=booking_id,
            booking_talent_id=booking_talent_id,
        )
        return self._persist(
            user_id=admin_id,
            notification_type=NotificationType.BOOKING_DECLINED,
            title=f"{talent_name} declined booking",
            message=f'{talent_name} has declined the booking "{booking_title}".',
            data=BookingDeclinedData(
                booking_id=booking_id, booking_talent_id=booking_talent_id
            ),
            action_url=f"/admin/bookings?booking={booking_id}",
        )

    def contract_created(
        self,
        *,
        talent_id: str | None = None,
        booking_title: str | None = None,
        contract_id: str | None = None,
    ) -> Notification:
        """Tell the talent on a new contract that it is waiting for a signature."""

        _require(talent_id=talent_id, booking_title=booking_title, contract_id=contract_id)
        return self._persist(
            user_id=talent_id,
            notification_type=NotificationType.CONTRACT_CREATED,
            title="Contract ready for signature",
            message=(
                f'Your contract for "{booking_title}" is ready for signature. '
                "Please review and sign within 7 days."
            ),
            data=ContractCreatedData(contract_id=contract_id),
            action_url="/talent/contracts",
        )

    def contract_signed(
        self,
        *,
        admin_id: str | None = None,
        talent_name: str | None = None,
        booking_title: str | None = None,
        contract_id: str | None = None,
    ) -> Notification:
        """Tell the admin who owns the booking that the talent signed."""

        _require(
            admin_id=admin_id,
            talent_name=talent_name,
            booking_title=booking_title,
            contract_id=contract_id,
        )
        return self._persist(
            user_id=admin_id,
            notification_type=NotificationType.CONTRACT_SIGNED,
            title=f"Contract signed by {talent_name}",
            message=(
                f'{talent_name} has signed the contract for "{booking_title}". '
                "The booking is now fully confirmed."
            ),
            data=ContractSignedData(contract_id=contract_id),
            action_url="/admin/contracts",
        )

    def booking_request(
        self,
        *,
        talent_id: str | None = None,
        booking_title: str | None = None,
        client_name: str | None = None,
        booking_id: str | None = None,
    ) -> Notification:
        """Tell a talent that a client wants to book them."""

        _require(
            talent_id=talent_id,
            booking_title=booking_title,
            client_name=client_name,
            booking_id=booking_id,
        )
        return self._persist(
            user_id=talent_id,
            notification_type=NotificationType.BOOKING_REQUEST,
            title="New booking request",
            message=(
                f'{client_name} has requested to book you for "{booking_title}". '
                "Please review and respond."
            ),
            data=BookingRequestData(booking_id=booking_id),
            action_url="/talent/bookings",
        )

    def talent_approved(self, *, talent_id: str | None = None) -> Notification:
        _require(talent_id=talent_id)
        return self._persist(
            user_id=talent_id,
            notification_type=NotificationType.TALENT_APPROVED,
            title="Profile approved!",
            message=(
                "Congratulations! Your talent profile has been approved "
                "and is now visible to clients."
            ),
            data=TalentApprovedData(),
            action_url="/talent/dashboard",
        )

    def task_assigned(
        self,
        *,
        talent_id: str | None = None,
        task_title: str | None = None,
        assigner_name: str | None = None,
        task_id: str | None = None,
    ) -> Notification:
        _require(
            talent_id=talent_id,
            task_title=task_title,
            assigner_name=assigner_name,
            task_id=task_id,
        )
        return self._persist(
            user_id=talent_id,
            notification_type=NotificationType.TASK_ASSIGNED,
            title="New task assigned",
            message=f'{assigner_name} assigned you the task "{task_title}".',
            data=TaskAssignedData(task_id=task_id),
            action_url="/talent/tasks",
        )

    def system_announcement(
        self,
        *,
        recipient_ids: Iterable[str] | None = None,
        title: str | None = None,
        message: str | None = None,
        announcement_id: str | None = None,
        mode: BulkCreateMode | str | None = None,
    ) -> list[Notification]:
        """Broadcast an announcement, one notification per distinct recipient."""

        _require(recipient_ids=recipient_ids, title=title, message=message)
        recipients: list[str] = []
        for recipient_id in recipient_ids:
            _require(recipient_id=recipient_id)
            if recipient_id not in recipients:
                recipients.append(recipient_id)
        if not recipients:
            return []

        data = AnnouncementData(announcement_id=announcement_id)
        drafts = [
            Notification(
                id=None,
                user_id=recipient_id,
                type=NotificationType.SYSTEM_ANNOUNCEMENT,
                title=title,
                message=message,
                data=data,
                action_url="/announcements",
            )
            for recipient_id in recipients
        ]
        saved = self.repository.create_many(
            drafts, mode=mode or get_settings().notification_bulk_mode
        )
        for notification in saved:
            self.publisher(notification)
        self.logger.info(
            "Announcement %r delivered to %d of %d recipient(s)",
            title,
            len(saved),
            len(recipients),
        )
        return saved

    def _persist(
        self,
        *,
        user_id: str,
        notification_type: NotificationType,
        title: str,
        message: str,
        data: NotificationData,
        action_url: str,
    ) -> Notification:
        saved = self.repository.create(
            Notification(
                id=None,
                user_id=user_id,
                type=notification_type,
                title=title,
                message=message,
                data=data,
                action_url=action_url,
            )
        )
        self.logger.info(
            "Created %s notification %s for user %s",
            notification_type.value,
            saved.id,
            user_id,
        )
        self.publisher(saved)
        if self.mailer is not None and notification_type in EMAIL_MIRRORED_TYPES:
            self._mirror_by_email(saved)
        return saved

    def _mirror_by_email(self, notification: Notification) -> None:
        recipient = UserRepository(self.session).get(notification.user_id)
        if recipient is None or not recipient.email:
            return
        if not self.mailer(recipient.email, notification):
            self.logger.debug(
                "Notification %s was not mirrored to %s", notification.id, recipient.email
            )


def notify_admin_booking_accepted(session: Session, **event: Any) -> Notification:
    return WorkflowNotifier(session).booking_accepted(**event)


def notify_admin_booking_declined(session: Session, **event: Any) -> Notification:
    return WorkflowNotifier(session).booking_declined(**event)


def notify_talent_contract_created(session: Session, **event: Any) -> Notification:
    return WorkflowNotifier(session).contract_created(**event)


def notify_admin_contract_signed(session: Session, **event: Any) -> Notification:
    return WorkflowNotifier(session).contract_signed(**event)


def notify_talent_booking_request(session: Session, **event: Any) -> Notification:
    return WorkflowNotifier(session).booking_request(**event)


def notify_talent_approved(session: Session, **event: Any) -> Notification:
    return WorkflowNotifier(session).talent_approved(**event)


def notify_talent_task_assigned(session: Session, **event: Any) -> Notification:
    return WorkflowNotifier(session).task_assigned(**event)


def broadcast_system_announcement(session: Session, **event: Any) -> list[Notification]:
    return WorkflowNotifier(session).system_announcement(**event)


__all__ = [
    "EMAIL_MIRRORED_TYPES",
    "WorkflowNotifier",
    "broadcast_system_announcement",
    "notify_admin_booking_accepted",
    "notify_admin_booking_declined",
    "notify_admin_contract_signed",
    "notify_talent_approved",
    "notify_talent_booking_request",
    "notify_talent_contract_created",
    "notify_talent_task_assigned",
]
