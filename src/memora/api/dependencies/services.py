"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.memora.api.dependencies.db import DBSession
from src.memora.api.dependencies.repositories import AccountRepo, SessionRepo
from src.memora.core.config import get_settings
from src.memora.core.security import TokenIssuer
from src.memora.services import AccountService, AuthService


def get_token_issuer() -> TokenIssuer:
    """Token issuer configured from settings (secrets and TTLs)."""
    return TokenIssuer.from_settings(get_settings())


TokenIssuerDep = Annotated[TokenIssuer, Depends(get_token_issuer)]


def get_auth_service(
    account_repo: AccountRepo,
    session_repo: SessionRepo,
    session: DBSession,
    token_issuer: TokenIssuerDep,
) -> AuthService:
    """Get auth service. All collaborators share the request's DB session."""
    return AuthService(account_repo, session_repo, session, token_issuer)


def get_account_service(
    account_repo: AccountRepo,
    session_repo: SessionRepo,
    session: DBSession,
) -> AccountService:
    return AccountService(account_repo, session_repo, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
