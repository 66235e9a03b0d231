"""Admin back-office endpoints driving announcements, retention and approvals."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from talentbook.application.use_cases.notifications import (
    broadcast_system_announcement,
    purge_stale_notifications,
)
from talentbook.application.use_cases.users import approve_talent
from talentbook.config import get_settings
from talentbook.domain.entities import USER_ROLES, User
from talentbook.infrastructure.database import get_db
from talentbook.infrastructure.repositories import UserRepository
from talentbook.interfaces.api.dependencies import require_admin
from talentbook.interfaces.api.schemas import (
    AnnouncementCreate,
    NotificationRead,
    PurgeResult,
    TalentApprovalRequest,
    UserRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.post(
    "/notifications/announcements",
    response_model=list[NotificationRead],
    status_code=status.HTTP_201_CREATED,
)
def create_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> list[NotificationRead]:
    """Broadcast a system announcement to the selected users."""

    recipient_ids = payload.recipient_ids
    if recipient_ids is None:
        unknown_roles = sorted(set(payload.roles) - set(USER_ROLES))
        if unknown_roles:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown roles: {', '.join(unknown_roles)}",
            )
        repository = UserRepository(db)
        recipient_ids = [
            user_id for role in payload.roles for user_id in repository.list_ids_by_role(role)
        ]

    notifications = broadcast_system_announcement(
        db,
        recipient_ids=recipient_ids,
        title=payload.title,
        message=payload.message,
        announcement_id=payload.announcement_id,
    )
    return [NotificationRead.from_entity(notification) for notification in notifications]


@router.post("/notifications/purge", response_model=PurgeResult)
def purge_notifications(
    days: int | None = Query(None, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> PurgeResult:
    """Run the retention sweep now instead of waiting for the scheduled job."""

    if days is None:
        days = get_settings().notification_retention_days
    removed = purge_stale_notifications(db, days=days)
    logger.info("Admin %s purged notifications older than %d days", current_user.id, days)
    return PurgeResult(removed=removed, days=days)


@router.patch("/talents/{talent_id}/approval", response_model=UserRead)
def decide_talent_approval(
    talent_id: str,
    payload: TalentApprovalRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> UserRead:
    """Approve or reject a pending talent profile."""

    try:
        talent = approve_talent(db, talent_id=talent_id, decision=payload.status)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return UserRead.model_validate(talent)
