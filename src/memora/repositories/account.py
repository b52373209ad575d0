"""Repository for Account entity."""

from typing import Any
from uuid import UUID

from sqlalchemy import update

from src.memora.models import Account
from src.memora.models.base import utc_now
from src.memora.repositories.base import BaseRepository


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively and stored trimmed/lowercased."""
    return email.strip().lower()


class AccountRepository(BaseRepository[Account]):
    """Repository for Account entity."""

    model = Account

    async def get_by_email(self, email: str) -> Account | None:
        """Get account by email address (normalized before lookup)."""
        return await self.first_where(Account.email == normalize_email(email))

    async def exists_by_email(self, email: str) -> bool:
        """Check if an account with the given email exists."""
        account = await self.get_by_email(email)
        return account is not None

    async def create(self, **fields: Any) -> Account:
        """Create an account and flush it so the id and defaults are populated."""
        if "email" in fields:
            fields["email"] = normalize_email(fields["email"])
        return await self.save(Account(**fields))

    async def update_last_login(self, account_id: UUID) -> None:
        stmt = (
            update(Account)
            .where(Account.id == account_id)  # type: ignore[arg-type]
            .values(last_login_at=utc_now())
        )
        await self.session.execute(stmt)
