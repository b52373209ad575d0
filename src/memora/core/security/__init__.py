"""Security utilities - password hashing and JWT tokens.

Re-exports all security-related functions for convenience.
"""

from src.memora.core.security.passwords import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    verify_password,
)
from src.memora.core.security.tokens import (
    DEFAULT_TTL_SECONDS,
    InvalidTokenError,
    TokenClaims,
    TokenIssuer,
    TokenPair,
    decode_token,
    encode_token,
    parse_ttl_to_seconds,
)

__all__ = [
    # Passwords
    "DUMMY_PASSWORD_HASH",
    "hash_password",
    "verify_password",
    # Tokens
    "DEFAULT_TTL_SECONDS",
    "InvalidTokenError",
    "TokenClaims",
    "TokenIssuer",
    "TokenPair",
    "decode_token",
    "encode_token",
    "parse_ttl_to_seconds",
]
