"""Use case for an admin's decision on a pending talent profile."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from talentbook.application.use_cases.notifications import (
    notify_best_effort,
    notify_talent_approved,
)
from talentbook.domain.entities import (
    ROLE_TALENT,
    STATUS_ACTIVE,
    STATUS_SUSPENDED,
    User,
)
from talentbook.domain.errors import ValidationError
from talentbook.infrastructure.repositories import UserRepository

APPROVAL_DECISIONS = {"approved": STATUS_ACTIVE, "rejected": STATUS_SUSPENDED}

logger = logging.getLogger(__name__)


def approve_talent(session: Session, *, talent_id: str, decision: str) -> User:
    """Apply ``decision`` to the talent account and notify them when approved.

    The status change is committed first; a failure to store the
    notification is logged and does not undo the approval.
    """

    status = APPROVAL_DECISIONS.get(decision)
    if status is None:
        raise ValidationError("decision must be 'approved' or 'rejected'")

    repository = UserRepository(session)
    talent = repository.get(talent_id)
    if talent is None or not talent.has_role(ROLE_TALENT):
        raise ValueError("Talent not found")

    updated = repository.update_status(talent_id, status)
    logger.info("Talent %s marked %s", talent_id, decision)

    if decision == "approved":
        notify_best_effort(notify_talent_approved, session, talent_id=talent_id)
    return updated


__all__ = ["APPROVAL_DECISIONS", "approve_talent"]
