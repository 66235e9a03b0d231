"""Aggregate application use cases."""

from .users import approve_talent, authenticate_user, create_user

__all__ = ["approve_talent", "authenticate_user", "create_user"]
