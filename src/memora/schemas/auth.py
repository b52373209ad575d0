import re

from pydantic import EmailStr, Field, field_validator

from src.memora.schemas.account import AccountSummary
from src.memora.schemas.base import CamelModel

PASSWORD_MIN_LENGTH = 8
# At least one lowercase letter, one uppercase letter and one digit
_PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).+$")


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=100)
    name: str = Field(min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if not _PASSWORD_PATTERN.match(v):
            raise ValueError(
                "Password must contain at least one uppercase letter, "
                "one lowercase letter and one number"
            )
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name must not be blank")
        return v.strip()


class LoginRequest(CamelModel):
    email: EmailStr
    # No strength rules here: a wrong password must always be a 401, never a 400
    password: str = Field(min_length=1)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class LogoutRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class TokenResponse(CamelModel):
    access_token: str
    refresh_token: str
    expires_in: int


class AuthResponse(TokenResponse):
    user: AccountSummary


class MessageResponse(CamelModel):
    message: str


class LogoutAllResponse(MessageResponse):
    revoked_sessions: int
