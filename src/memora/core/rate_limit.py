"""Per-endpoint rate limiting (slowapi).

Storage is in-memory (per process) unless RATE_LIMIT_STORAGE_URI points at a
shared backend supported by the `limits` library. Disabled in testing.
"""

from slowapi import Limiter
from starlette.requests import Request

from src.memora.core.client_context import get_client_ip
from src.memora.core.config import get_settings
from src.memora.core.logging import get_logger

logger = get_logger(__name__)

REGISTER_LIMIT = "3/hour"
LOGIN_LIMIT = "5/minute"
REFRESH_LIMIT = "10/minute"
LOGOUT_LIMIT = "5/minute"


def get_rate_limit_key(request: Request) -> str:
    """Rate limit key: the client IP only, never user-controlled identifiers."""
    ip = get_client_ip(
        request.headers.get("x-forwarded-for"),
        request.client.host if request.client else None,
    )
    return ip or "unknown"


def create_limiter() -> Limiter:
    """Create the rate limiter. Disabled in the testing environment."""
    settings = get_settings()

    if settings.is_testing:
        logger.info("Rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.rate_limit_storage_uri:
        logger.info("Rate limiter using shared storage backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.rate_limit_storage_uri)

    logger.info("Rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; reconfiguration requires a restart
limiter = create_limiter()
