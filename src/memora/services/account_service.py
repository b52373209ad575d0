"""Account management service."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.memora.core.exceptions import BadRequestError, NotFoundError
from src.memora.core.logging import get_logger
from src.memora.models import Account, AccountStatus
from src.memora.models.base import utc_now
from src.memora.repositories import AccountRepository, SessionRepository
from src.memora.services.base import transaction

logger = get_logger(__name__)

ACCOUNT_NOT_FOUND = "Account not found"


class AccountService:
    """Account lookups, profile edits and status transitions."""

    def __init__(
        self,
        account_repo: AccountRepository,
        session_repo: SessionRepository,
        session: AsyncSession,
    ):
        self.account_repo = account_repo
        self.session_repo = session_repo
        self.session = session

    async def get_by_id(self, account_id: UUID) -> Account:
        """Raises NotFoundError when no account has this id."""
        account = await self.account_repo.get_by_id(account_id)
        if account is None:
            raise NotFoundError(ACCOUNT_NOT_FOUND)
        return account

    async def update_profile(self, account_id: UUID, name: str) -> Account:
        """Rename an account. Email, role and status are not editable here."""
        async with transaction(self.session):
            account = await self.get_by_id(account_id)
            account.name = name.strip()
            account.updated_at = utc_now()
            await self.session.commit()

        logger.info("Profile updated", account_id=str(account_id), fields=["name"])
        return account

    async def update_status(
        self,
        account_id: UUID,
        status: AccountStatus,
        requester_id: UUID | None = None,
    ) -> Account:
        """Change an account's status.

        Leaving the active state revokes every session of the account in the
        same transaction, so it can no longer refresh.

        Raises:
            NotFoundError: No account with this id.
            BadRequestError: The requester tried to suspend itself.
        """
        async with transaction(self.session):
            account = await self.get_by_id(account_id)

            if account_id == requester_id and status == AccountStatus.SUSPENDED:
                raise BadRequestError("Cannot suspend your own account")

            account.status = status.value
            account.updated_at = utc_now()
            revoked = 0
            if status != AccountStatus.ACTIVE:
                revoked = await self.session_repo.delete_by_account_id(account.id)
            await self.session.commit()

        logger.info(
            "Account status changed",
            account_id=str(account_id),
            status=status.value,
            updated_by=str(requester_id) if requester_id else None,
            revoked_sessions=revoked,
        )
        return account
