"""SQLAlchemy model for the user table."""

from uuid import uuid4

from sqlalchemy import Column, DateTime, String

from talentbook.infrastructure.database import Base
from talentbook.utils import utc_now_naive


def _new_id() -> str:
    return str(uuid4())


class UserModel(Base):
    """Database representation of a marketplace user."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=_new_id)
    role = Column(String(20), nullable=False, default="talent", index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime(), nullable=False, default=utc_now_naive)
    updated_at = Column(DateTime(), nullable=False, default=utc_now_naive)
