"""Shared fixtures: an in-memory database, a controllable clock and user factories."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from talentbook.domain.entities import (  # noqa: E402
    Notification,
    NotificationType,
    TalentApprovedData,
    User,
)
from talentbook.infrastructure.database import (  # noqa: E402
    Base,
    build_engine,
    initialize_database,
)
from talentbook.infrastructure.repositories import UserRepository  # noqa: E402


class FakeClock:
    """Clock returning a fixed instant until moved explicitly."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        self.now += timedelta(**delta)
        return self.now


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    initialize_database(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine, checkfirst=True)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture()
def make_user(session):
    """Insert a user; the password is stored as given unless already hashed by the caller."""

    def _make_user(
        *,
        user_id: str | None = None,
        role: str = "talent",
        name: str = "Test User",
        email: str | None = None,
        password: str = "not-a-real-hash",
        status: str = "active",
    ) -> User:
        return UserRepository(session).create(
            User(
                id=user_id,
                role=role,
                name=name,
                email=email or f"{uuid4().hex}@example.com",
                password=password,
                status=status,
            )
        )

    return _make_user


def draft_notification(user_id: str, title: str = "Profile approved!") -> Notification:
    return Notification(
        id=None,
        user_id=user_id,
        type=NotificationType.TALENT_APPROVED,
        title=title,
        message="Your profile is visible to clients.",
        data=TalentApprovedData(),
        action_url="/talent/dashboard",
    )
