"""Use case for creating users."""

from sqlalchemy.orm import Session

from talentbook.domain.entities import (
    ROLE_TALENT,
    STATUS_ACTIVE,
    STATUS_PENDING,
    USER_ROLES,
    User,
)
from talentbook.infrastructure.repositories import UserRepository
from talentbook.infrastructure.security import get_password_hash


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
) -> User:
    """Create a new user ensuring unique email addresses.

    Talent accounts start as ``pending`` until an admin approves the profile;
    every other role is active immediately.
    """

    role = role.strip().lower()
    if role not in USER_ROLES:
        raise ValueError(f"Unknown role: {role}")

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise ValueError("Email address is already registered")

    user = User(
        id=None,
        role=role,
        name=name.strip(),
        email=email,
        password=get_password_hash(password),
        status=STATUS_PENDING if role == ROLE_TALENT else STATUS_ACTIVE,
    )
    return repository.create(user)
