from datetime import datetime
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator

from src.memora.models import AccountRole, AccountStatus
from src.memora.schemas.base import CamelModel


class AccountSummary(CamelModel):
    """Account fields returned alongside a token pair."""

    id: UUID
    email: str
    name: str
    role: AccountRole

    model_config = ConfigDict(from_attributes=True)


class AccountRead(AccountSummary):
    status: AccountStatus
    email_verified: bool
    last_login_at: datetime | None
    created_at: datetime


class AccountStatusUpdate(CamelModel):
    status: AccountStatus


class ProfileUpdate(CamelModel):
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v.strip()
