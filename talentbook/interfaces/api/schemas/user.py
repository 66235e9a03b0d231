"""User schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    role: str
    name: str
    email: str
    status: str
    created_at: datetime | None
    updated_at: datetime | None


class TalentApprovalRequest(BaseModel):
    status: Literal["approved", "rejected"]
