"""Repository for AuthSession entity (the session store)."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select

from src.memora.models import AuthSession
from src.memora.models.base import utc_now
from src.memora.repositories.base import BaseRepository


class SessionRepository(BaseRepository[AuthSession]):
    """Persistent refresh-token sessions. Every call is a store round trip."""

    model = AuthSession

    async def create(
        self,
        account_id: UUID,
        refresh_token: str,
        expires_at: datetime,
        device_info: str | None = None,
        ip_address: str | None = None,
    ) -> AuthSession:
        """Add a session and flush it.

        A duplicate refresh token surfaces as IntegrityError on flush.
        """
        auth_session = AuthSession(
            account_id=account_id,
            refresh_token=refresh_token,
            expires_at=expires_at,
            device_info=device_info[:500] if device_info else None,
            ip_address=ip_address,
        )
        return await self.save(auth_session)

    async def find_by_refresh_token(self, refresh_token: str) -> AuthSession | None:
        return await self.first_where(AuthSession.refresh_token == refresh_token)

    async def delete_by_refresh_token(
        self, refresh_token: str, account_id: UUID | None = None
    ) -> bool:
        """Delete the session holding refresh_token.

        Idempotent. Returns True only for the caller whose delete removed
        the row, which makes it usable as a compare-and-delete primitive.
        With account_id, a session owned by another account is not touched.
        """
        stmt = delete(AuthSession).where(
            AuthSession.refresh_token == refresh_token  # type: ignore[arg-type]
        )
        if account_id is not None:
            stmt = stmt.where(AuthSession.account_id == account_id)  # type: ignore[arg-type]
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) > 0  # type: ignore[attr-defined]

    async def delete_by_account_id(self, account_id: UUID) -> int:
        """Delete every session of an account. Returns the number deleted."""
        stmt = delete(AuthSession).where(
            AuthSession.account_id == account_id  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete_expired(self, now: datetime | None = None) -> int:
        """Delete sessions whose expires_at is at or before now.

        Standalone sweep: commits its own transaction. Safe to run
        concurrently or repeatedly.

        Returns:
            Number of sessions deleted
        """
        cutoff = now or utc_now()
        stmt = delete(AuthSession).where(
            AuthSession.expires_at <= cutoff  # type: ignore[arg-type]
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def count_for_account(self, account_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(AuthSession)
            .where(AuthSession.account_id == account_id)
        )
        return result.scalar_one()
