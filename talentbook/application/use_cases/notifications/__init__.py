"""Public helpers for emitting and reading domain notifications."""

from .best_effort import notify_best_effort
from .read_state import (
    count_unread,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .retention import purge_stale_notifications
from .triggers import (
    WorkflowNotifier,
    broadcast_system_announcement,
    notify_admin_booking_accepted,
    notify_admin_booking_declined,
    notify_admin_contract_signed,
    notify_talent_approved,
    notify_talent_booking_request,
    notify_talent_contract_created,
    notify_talent_task_assigned,
)

__all__ = [
    "WorkflowNotifier",
    "broadcast_system_announcement",
    "count_unread",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_admin_booking_accepted",
    "notify_admin_booking_declined",
    "notify_admin_contract_signed",
    "notify_best_effort",
    "notify_talent_approved",
    "notify_talent_booking_request",
    "notify_talent_contract_created",
    "notify_talent_task_assigned",
    "purge_stale_notifications",
]
