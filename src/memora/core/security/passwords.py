"""Password hashing and verification (Argon2id)."""

import argon2

from src.memora.core.config import get_settings


def _create_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


_password_hasher = _create_password_hasher()


def hash_password(password: str) -> str:
    """Hash password using Argon2id. Every call uses a fresh salt."""
    return _password_hasher.hash(password)


def verify_password(password: str, hashed: str | None) -> bool:
    """Verify password against a stored hash.

    Returns False on mismatch or when no hash is stored. A stored hash that
    is not a valid Argon2 hash raises argon2.exceptions.InvalidHashError.
    """
    if not hashed:
        return False
    try:
        return _password_hasher.verify(hashed, password)
    except argon2.exceptions.VerifyMismatchError:
        return False


# Verified against when an account is missing or has no password, so that
# both paths cost one hash computation.
DUMMY_PASSWORD_HASH = hash_password("memora-dummy-password")
