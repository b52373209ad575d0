"""Account model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.memora.models.base import utc_now
from src.memora.models.enums import AccountRole, AccountStatus


class Account(SQLModel, table=True):
    """Identity record. Status transitions model removal."""

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    name: str = Field(max_length=100)
    # Absent for accounts that authenticate through an external provider
    password_hash: str | None = Field(default=None, max_length=255)
    role: str = Field(default=AccountRole.USER.value, max_length=20)
    status: str = Field(default=AccountStatus.ACTIVE.value, max_length=20)
    email_verified: bool = Field(default=False)
    last_login_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE.value
