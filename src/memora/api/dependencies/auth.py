"""Authentication and authorization dependencies."""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Header

from src.memora.api.dependencies.services import AuthServiceDep
from src.memora.core.exceptions import ForbiddenError, UnauthorizedError
from src.memora.core.logging import bind_account_context
from src.memora.models import Account, AccountRole

BEARER_PREFIX = "Bearer "


def parse_bearer_token(authorization: str | None) -> str:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError("Missing or invalid authorization header")
    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise UnauthorizedError("Missing or invalid authorization header")
    return token


async def get_current_account(
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> Account:
    """Validate the bearer access token and return the active account."""
    token = parse_bearer_token(authorization)
    account = await auth_service.authenticate_access_token(token)

    # Bind account context to logs
    bind_account_context(account.id, account.role, account.email)

    return account


CurrentAccount = Annotated[Account, Depends(get_current_account)]


def require_roles(*roles: AccountRole) -> Callable[[Account], Awaitable[Account]]:
    """Build a dependency that admits only accounts holding one of roles.

    A superadmin satisfies any role requirement.
    """
    allowed = {role.value for role in roles} | {AccountRole.SUPERADMIN.value}

    async def _require_roles(account: CurrentAccount) -> Account:
        if account.role not in allowed:
            raise ForbiddenError("Insufficient permissions")
        return account

    return _require_roles


AdminAccount = Annotated[Account, Depends(require_roles(AccountRole.ADMIN))]
