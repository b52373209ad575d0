from src.memora.schemas.account import (
    AccountRead,
    AccountStatusUpdate,
    AccountSummary,
    ProfileUpdate,
)
from src.memora.schemas.auth import (
    AuthResponse,
    LoginRequest,
    LogoutAllResponse,
    LogoutRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)

__all__ = [
    "AccountRead",
    "AccountStatusUpdate",
    "AccountSummary",
    "AuthResponse",
    "LoginRequest",
    "LogoutAllResponse",
    "LogoutRequest",
    "MessageResponse",
    "ProfileUpdate",
    "RefreshRequest",
    "RegisterRequest",
    "TokenResponse",
]
