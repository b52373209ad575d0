"""JWT access/refresh token issuing and verification."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.memora.core.config import Settings, ttl_seconds
from src.memora.core.logging import get_logger
from src.memora.models.base import utc_now
from src.memora.models.enums import AccountRole, TokenType

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 900


class InvalidTokenError(ValueError):
    """Token has a bad signature, is expired, or carries a malformed payload."""


def parse_ttl_to_seconds(ttl: str) -> int:
    """Convert a compact duration ("30s", "15m", "12h", "7d") to seconds.

    Unparsable values fall back to DEFAULT_TTL_SECONDS instead of failing.
    The fallback is logged at warning level so that configuration typos
    show up in telemetry.
    """
    seconds = ttl_seconds(ttl)
    if seconds is None:
        logger.warning(
            "Unparsable token TTL, using default",
            ttl=ttl,
            default_seconds=DEFAULT_TTL_SECONDS,
        )
        return DEFAULT_TTL_SECONDS
    return seconds


class TokenClaims(BaseModel):
    """Claims carried by both access and refresh tokens."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    subject_id: str = Field(alias="sub", min_length=1)
    email: str = Field(min_length=1)
    role: AccountRole
    type: TokenType


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int  # access token lifetime in seconds
    refresh_expires_at: datetime  # naive UTC, stored with the session


def encode_token(
    claims: TokenClaims,
    secret: str,
    ttl_seconds: int,
    algorithm: str = "HS256",
) -> str:
    """Sign claims into a JWT valid for ttl_seconds.

    Includes a unique JWT ID (jti) so that two tokens minted in the same
    second for the same account never collide.
    """
    now = datetime.now(UTC)
    to_encode: dict[str, Any] = {
        "sub": claims.subject_id,
        "email": claims.email,
        "role": claims.role.value,
        "type": claims.type.value,
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds),
        "jti": uuid4().hex,
    }
    return jwt.encode(to_encode, secret, algorithm=algorithm)  # type: ignore[no-any-return]


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> TokenClaims:
    """Decode and validate a JWT. Raises InvalidTokenError on any failure."""
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except JWTError as e:
        raise InvalidTokenError(str(e) or "Invalid token") from e

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as e:
        raise InvalidTokenError("Malformed token payload") from e


class TokenIssuer:
    """Mints and verifies access/refresh token pairs.

    Access and refresh tokens are signed with independent secrets and carry
    a type discriminator; neither verifies as the other.
    """

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: str = "15m",
        refresh_ttl: str = "7d",
        algorithm: str = "HS256",
    ):
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            access_secret=settings.jwt_access_secret,
            refresh_secret=settings.jwt_refresh_secret,
            access_ttl=settings.jwt_access_ttl,
            refresh_ttl=settings.jwt_refresh_ttl,
            algorithm=settings.jwt_algorithm,
        )

    @property
    def access_ttl_seconds(self) -> int:
        return parse_ttl_to_seconds(self.access_ttl)

    @property
    def refresh_ttl_seconds(self) -> int:
        return parse_ttl_to_seconds(self.refresh_ttl)

    def issue_pair(self, subject_id: UUID | str, email: str, role: AccountRole | str) -> TokenPair:
        """Issue a fresh access/refresh pair for an account."""
        access_seconds = self.access_ttl_seconds
        refresh_seconds = self.refresh_ttl_seconds
        role = AccountRole(role)

        access_token = encode_token(
            TokenClaims(sub=str(subject_id), email=email, role=role, type=TokenType.ACCESS),
            self.access_secret,
            access_seconds,
            self.algorithm,
        )
        refresh_token = encode_token(
            TokenClaims(sub=str(subject_id), email=email, role=role, type=TokenType.REFRESH),
            self.refresh_secret,
            refresh_seconds,
            self.algorithm,
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=access_seconds,
            refresh_expires_at=utc_now() + timedelta(seconds=refresh_seconds),
        )

    def verify_access(self, token: str) -> TokenClaims:
        return self._verify(token, self.access_secret, TokenType.ACCESS)

    def verify_refresh(self, token: str) -> TokenClaims:
        return self._verify(token, self.refresh_secret, TokenType.REFRESH)

    def _verify(self, token: str, secret: str, expected: TokenType) -> TokenClaims:
        claims = decode_token(token, secret, self.algorithm)
        if claims.type != expected:
            raise InvalidTokenError("Invalid token type")
        return claims
