"""Authentication endpoints."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.memora.api.dependencies import AccountServiceDep, AuthServiceDep, CurrentAccount
from src.memora.core.client_context import client_info_from_request
from src.memora.core.rate_limit import (
    LOGIN_LIMIT,
    LOGOUT_LIMIT,
    REFRESH_LIMIT,
    REGISTER_LIMIT,
    limiter,
)
from src.memora.schemas import (
    AccountRead,
    AccountSummary,
    AuthResponse,
    LoginRequest,
    LogoutAllResponse,
    LogoutRequest,
    MessageResponse,
    ProfileUpdate,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from src.memora.services import AuthResult

router = APIRouter(prefix="/auth", tags=["auth"])

_TOKEN_EXAMPLE = "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
_AUTH_EXAMPLE = {
    "accessToken": _TOKEN_EXAMPLE,
    "refreshToken": _TOKEN_EXAMPLE,
    "expiresIn": 900,
    "user": {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "email": "alice@example.com",
        "name": "Alice",
        "role": "user",
    },
}


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        access_token=result.tokens.access_token,
        refresh_token=result.tokens.refresh_token,
        expires_in=result.tokens.expires_in,
        user=AccountSummary.model_validate(result.account),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "Account created and signed in",
            "content": {"application/json": {"example": _AUTH_EXAMPLE}},
        },
        400: {"description": "Validation error"},
        409: {"description": "Email already registered"},
    },
)
@limiter.limit(REGISTER_LIMIT)
async def register(
    request: Request,
    register_data: RegisterRequest,
    service: AuthServiceDep,
) -> AuthResponse:
    """Register a new account and return a token pair."""
    result = await service.register(
        register_data.email,
        register_data.password,
        register_data.name,
        client_info_from_request(request),
    )
    return _auth_response(result)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {"application/json": {"example": _AUTH_EXAMPLE}},
        },
        401: {"description": "Invalid credentials or account not active"},
    },
)
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request, login_data: LoginRequest, service: AuthServiceDep
) -> AuthResponse:
    """Authenticate with email and password."""
    result = await service.login(
        login_data.email,
        login_data.password,
        client_info_from_request(request),
    )
    return _auth_response(result)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={
        200: {
            "description": "Token refreshed successfully with token rotation",
            "content": {
                "application/json": {
                    "example": {
                        "accessToken": _TOKEN_EXAMPLE,
                        "refreshToken": _TOKEN_EXAMPLE,
                        "expiresIn": 900,
                    }
                }
            },
        },
        401: {"description": "Invalid, expired or already rotated refresh token"},
    },
)
@limiter.limit(REFRESH_LIMIT)
async def refresh(
    request: Request, refresh_data: RefreshRequest, service: AuthServiceDep
) -> TokenResponse:
    """Exchange a refresh token for a new pair.

    The presented refresh token is permanently invalidated.
    """
    tokens = await service.refresh(refresh_data.refresh_token, client_info_from_request(request))
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=tokens.expires_in,
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"description": "Missing or invalid access token"}},
)
@limiter.limit(LOGOUT_LIMIT)
async def logout(
    request: Request,
    logout_data: LogoutRequest,
    current_account: CurrentAccount,
    service: AuthServiceDep,
) -> MessageResponse:
    """End the current account's session holding the given refresh token. Idempotent."""
    await service.logout(logout_data.refresh_token, account_id=current_account.id)
    return MessageResponse(message="Logged out successfully")


@router.post(
    "/logout-all",
    response_model=LogoutAllResponse,
    responses={401: {"description": "Missing or invalid access token"}},
)
@limiter.limit(LOGOUT_LIMIT)
async def logout_all(
    request: Request,
    current_account: CurrentAccount,
    service: AuthServiceDep,
) -> LogoutAllResponse:
    """End every session of the current account."""
    count = await service.logout_all(current_account.id)
    return LogoutAllResponse(message="Logged out from all devices", revoked_sessions=count)


@router.get("/me", response_model=AccountRead)
async def me(current_account: CurrentAccount) -> AccountRead:
    """Return the authenticated account's profile."""
    return AccountRead.model_validate(current_account)


@router.patch(
    "/me",
    response_model=AccountRead,
    responses={
        400: {"description": "Validation error"},
        401: {"description": "Missing or invalid access token"},
    },
)
async def update_me(
    profile_data: ProfileUpdate,
    current_account: CurrentAccount,
    service: AccountServiceDep,
) -> AccountRead:
    """Update the authenticated account's profile."""
    account = await service.update_profile(current_account.id, profile_data.name)
    return AccountRead.model_validate(account)
