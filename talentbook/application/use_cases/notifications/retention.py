"""Age-based removal of stale notifications."""

from __future__ import annotations

import logging
import threading

from sqlalchemy.orm import Session

from talentbook.config import get_settings
from talentbook.infrastructure.repositories import NotificationRepository
from talentbook.infrastructure.repositories.notification_repository import Clock
from talentbook.utils import now_in_app_timezone

_default_logger = logging.getLogger(__name__)

# Two sweeps in the same process never overlap; across processes the scheduler owns exclusion.
_sweep_lock = threading.Lock()


def purge_stale_notifications(
    session: Session,
    *,
    days: int | None = None,
    clock: Clock = now_in_app_timezone,
    logger: logging.Logger | None = None,
) -> int | None:
    """Delete notifications older than ``days`` and return how many were removed.

    ``days`` defaults to ``NOTIFICATION_RETENTION_DAYS``. Returns ``None`` when
    another sweep is already running in this process.
    """

    log = logger or _default_logger
    if days is None:
        days = get_settings().notification_retention_days

    if not _sweep_lock.acquire(blocking=False):
        log.info("Notification retention sweep already running; skipping")
        return None
    try:
        repository = NotificationRepository(session, clock=clock, logger=log)
        return repository.delete_older_than(days)
    finally:
        _sweep_lock.release()


__all__ = ["purge_stale_notifications"]
