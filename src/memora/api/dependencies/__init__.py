"""FastAPI dependency injection definitions."""

# Auth
from src.memora.api.dependencies.auth import (
    AdminAccount,
    CurrentAccount,
    get_current_account,
    parse_bearer_token,
    require_roles,
)

# Database
from src.memora.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.memora.api.dependencies.repositories import (
    AccountRepo,
    SessionRepo,
    get_account_repository,
    get_session_repository,
)

# Services
from src.memora.api.dependencies.services import (
    AccountServiceDep,
    AuthServiceDep,
    TokenIssuerDep,
    get_account_service,
    get_auth_service,
    get_token_issuer,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AdminAccount",
    "CurrentAccount",
    "get_current_account",
    "parse_bearer_token",
    "require_roles",
    # Repositories
    "AccountRepo",
    "SessionRepo",
    "get_account_repository",
    "get_session_repository",
    # Services
    "AccountServiceDep",
    "AuthServiceDep",
    "TokenIssuerDep",
    "get_account_service",
    "get_auth_service",
    "get_token_issuer",
]
