"""Session model - one record per active refresh-token grant."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.memora.models.base import utc_now


class AuthSession(SQLModel, table=True):
    """Binds a refresh token to an account until expires_at."""

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    account_id: UUID = Field(foreign_key="accounts.id", index=True)
    refresh_token: str = Field(unique=True, index=True)
    expires_at: datetime = Field(index=True)
    device_info: str | None = Field(default=None, max_length=500)
    ip_address: str | None = Field(default=None, max_length=45)
    created_at: datetime = Field(default_factory=utc_now)
