"""Authentication service - register, login, refresh rotation, logout."""

import asyncio
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.memora.core.client_context import ClientInfo
from src.memora.core.exceptions import AppError, ConflictError, UnauthorizedError
from src.memora.core.logging import get_logger
from src.memora.core.security import (
    DUMMY_PASSWORD_HASH,
    InvalidTokenError,
    TokenIssuer,
    TokenPair,
    hash_password,
    verify_password,
)
from src.memora.models import Account, AccountRole, AccountStatus
from src.memora.models.base import is_expired, utc_now
from src.memora.repositories import AccountRepository, SessionRepository
from src.memora.services.base import transaction

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_NOT_ACTIVE = "Account is not active"
INVALID_REFRESH_TOKEN = "Invalid refresh token"
REFRESH_TOKEN_EXPIRED = "Refresh token expired"
ACCOUNT_UNAVAILABLE = "Account not found or inactive"
INVALID_ACCESS_TOKEN = "Invalid or expired token"


@dataclass(frozen=True)
class AuthResult:
    """Token pair plus the account it was issued for."""

    tokens: TokenPair
    account: Account


class AuthService:
    """Authentication service.

    Framework-agnostic: takes plain data in and returns plain data or raises
    AppError subclasses. Owns the transaction for every operation; on any
    failure the DB session is rolled back before the error propagates, and
    tokens are only returned after the session row is committed.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        session_repo: SessionRepository,
        session: AsyncSession,
        token_issuer: TokenIssuer,
    ):
        self.account_repo = account_repo
        self.session_repo = session_repo
        self.session = session
        self.token_issuer = token_issuer

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        client: ClientInfo | None = None,
    ) -> AuthResult:
        """Create an active account and sign it in.

        Raises:
            ConflictError: An account with this email already exists.
        """
        async with transaction(self.session):
            if await self.account_repo.exists_by_email(email):
                raise ConflictError("Email already registered")

            password_hash = await asyncio.to_thread(hash_password, password)
            try:
                account = await self.account_repo.create(
                    email=email,
                    name=name.strip(),
                    password_hash=password_hash,
                    role=AccountRole.USER.value,
                    status=AccountStatus.ACTIVE.value,
                    email_verified=False,
                )
            except IntegrityError as e:
                # Lost a race against a concurrent registration
                raise ConflictError("Email already registered") from e

            tokens = await self._start_session(account, client)
            await self.session.commit()

        logger.info("Account registered", account_id=str(account.id))
        return AuthResult(tokens=tokens, account=account)

    async def login(
        self,
        email: str,
        password: str,
        client: ClientInfo | None = None,
    ) -> AuthResult:
        """Verify credentials and open a new session.

        A missing account, an account without a password and a wrong password
        all fail with the same message. The status check runs last, once the
        caller has proven knowledge of the password.
        """
        async with transaction(self.session):
            account = await self.account_repo.get_by_email(email)

            # Always perform password verification to prevent timing attacks
            # that could reveal whether an email exists in the system
            stored_hash = account.password_hash if account and account.password_hash else None
            password_valid = await asyncio.to_thread(
                verify_password, password, stored_hash or DUMMY_PASSWORD_HASH
            )

            if account is None or stored_hash is None or not password_valid:
                logger.info("Login rejected", reason="invalid_credentials")
                raise UnauthorizedError(INVALID_CREDENTIALS)

            if not account.is_active:
                logger.info("Login rejected", reason="inactive", account_id=str(account.id))
                raise UnauthorizedError(ACCOUNT_NOT_ACTIVE)

            tokens = await self._start_session(account, client)
            await self.session.commit()

        logger.info("Login succeeded", account_id=str(account.id))
        return AuthResult(tokens=tokens, account=account)

    async def refresh(self, refresh_token: str, client: ClientInfo | None = None) -> TokenPair:
        """Exchange a refresh token for a new pair, invalidating the old one.

        Store failures surface as InternalError, never as a 401. Anything else
        that is not already an AppError is reported as an invalid refresh token.
        """
        async with transaction(self.session):
            try:
                return await self._rotate(refresh_token, client)
            except (AppError, SQLAlchemyError):
                raise
            except Exception as e:
                logger.warning("Refresh failed", error=str(e))
                raise UnauthorizedError(INVALID_REFRESH_TOKEN) from e

    async def _rotate(self, refresh_token: str, client: ClientInfo | None) -> TokenPair:
        try:
            claims = self.token_issuer.verify_refresh(refresh_token)
        except InvalidTokenError as e:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN) from e

        auth_session = await self.session_repo.find_by_refresh_token(refresh_token)
        if auth_session is None or str(auth_session.account_id) != claims.subject_id:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        if is_expired(auth_session.expires_at, utc_now()):
            # Purge on touch, not only via the sweep
            await self.session_repo.delete_by_refresh_token(refresh_token)
            await self.session.commit()
            raise UnauthorizedError(REFRESH_TOKEN_EXPIRED)

        account = await self.account_repo.get_by_id(auth_session.account_id)
        if account is None or not account.is_active:
            raise UnauthorizedError(ACCOUNT_UNAVAILABLE)

        # Compare-and-delete: only one concurrent caller removes the row
        if not await self.session_repo.delete_by_refresh_token(refresh_token):
            logger.warning("Refresh token already rotated", account_id=str(account.id))
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        tokens = await self._create_session(account, client)
        await self.session.commit()

        logger.info("Refresh token rotated", account_id=str(account.id))
        return tokens

    async def logout(self, refresh_token: str, account_id: UUID | None = None) -> None:
        """Delete the session holding refresh_token. Succeeds if already gone.

        With account_id, only a session owned by that account is removed;
        another account's token is left alone and the call still succeeds.
        """
        async with transaction(self.session):
            removed = await self.session_repo.delete_by_refresh_token(
                refresh_token, account_id=account_id
            )
            await self.session.commit()

        logger.info("Logged out", session_removed=removed)

    async def logout_all(self, account_id: UUID) -> int:
        """Delete every session of an account. Returns the number removed."""
        async with transaction(self.session):
            count = await self.session_repo.delete_by_account_id(account_id)
            await self.session.commit()

        logger.info("Logged out everywhere", account_id=str(account_id), session_count=count)
        return count

    async def authenticate_access_token(self, access_token: str) -> Account:
        """Resolve a bearer access token into an active account."""
        try:
            claims = self.token_issuer.verify_access(access_token)
            account_id = UUID(claims.subject_id)
        except (InvalidTokenError, ValueError) as e:
            raise UnauthorizedError(INVALID_ACCESS_TOKEN) from e

        account = await self.account_repo.get_by_id(account_id)
        if account is None or not account.is_active:
            raise UnauthorizedError(ACCOUNT_UNAVAILABLE)
        return account

    async def _create_session(self, account: Account, client: ClientInfo | None) -> TokenPair:
        tokens = self.token_issuer.issue_pair(account.id, account.email, account.role)
        await self.session_repo.create(
            account_id=account.id,
            refresh_token=tokens.refresh_token,
            expires_at=tokens.refresh_expires_at,
            device_info=client.user_agent if client else None,
            ip_address=client.ip_address if client else None,
        )
        return tokens

    async def _start_session(self, account: Account, client: ClientInfo | None) -> TokenPair:
        tokens = await self._create_session(account, client)
        await self.account_repo.update_last_login(account.id)
        return tokens
