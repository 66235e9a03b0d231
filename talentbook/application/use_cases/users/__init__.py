"""Use cases for managing users."""

from .approve_talent import APPROVAL_DECISIONS, approve_talent
from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import create_user

__all__ = [
    "APPROVAL_DECISIONS",
    "AuthenticationStatus",
    "approve_talent",
    "authenticate_user",
    "create_user",
]
