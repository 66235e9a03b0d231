"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from talentbook.domain.entities import User
from talentbook.infrastructure.models import UserModel
from talentbook.utils import (
    from_storage_datetime,
    now_in_app_timezone,
    to_storage_datetime,
)


class UserRepository:
    """Provide the user lookups needed to authenticate callers and address notifications."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: str) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        stmt = select(UserModel).where(UserModel.email == email.strip().lower())
        model = self.session.execute(stmt).scalar_one_or_none()
        return self._to_entity(model) if model else None

    def list_ids_by_role(self, role: str) -> list[str]:
        stmt = select(UserModel.id).where(UserModel.role == role).order_by(UserModel.id)
        return list(self.session.execute(stmt).scalars().all())

    def create(self, user: User) -> User:
        now = to_storage_datetime(user.created_at or now_in_app_timezone())
        model = UserModel(
            role=user.role,
            name=user.name,
            email=user.email.strip().lower(),
            password=user.password,
            status=user.status,
            created_at=now,
            updated_at=now,
        )
        if user.id:
            model.id = user.id
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(self, user_id: str, status: str) -> User:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        model.status = status
        model.updated_at = to_storage_datetime(now_in_app_timezone())
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=model.role,
            name=model.name,
            email=model.email,
            password=model.password,
            status=model.status,
            created_at=from_storage_datetime(model.created_at),
            updated_at=from_storage_datetime(model.updated_at),
        )


__all__ = ["UserRepository"]
