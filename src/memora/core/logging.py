"""Logging configuration using structlog."""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any
from uuid import UUID

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Event keys whose values must never reach log output
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "access_token",
        "refresh_token",
        "authorization",
        "secret",
    }
)
REDACTED = "[REDACTED]"


def redact_sensitive(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor that masks credential-bearing fields."""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def setup_logging(debug: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog for structured logging.

    Args:
        debug: If True, use colored console output at DEBUG level.
            If False, emit JSON at log_level.
        log_level: Standard library level name used outside debug mode.
    """
    level = logging.DEBUG if debug else logging.getLevelNamesMapping()[log_level]
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_sensitive,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Quiet chatty libraries
    for name, lib_level in (
        ("sqlalchemy.engine", logging.WARNING),
        ("aiosqlite", logging.WARNING),
        ("temporalio", logging.INFO),
        ("uvicorn.access", logging.WARNING),
    ):
        logging.getLogger(name).setLevel(lib_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)


def bind_request_context(request_id: str | None) -> None:
    """Bind the correlation ID of the current request to all subsequent log calls."""
    if request_id:
        bind_contextvars(request_id=request_id)


def bind_account_context(account_id: UUID, role: str, email: str | None = None) -> None:
    """Bind the authenticated account to all subsequent log calls.

    Args:
        account_id: The authenticated account's ID.
        role: The account role at the time of the request.
        email: Optional email, only logged if settings.log_user_emails is True.
    """
    from src.memora.core.config import get_settings

    bind_contextvars(account_id=str(account_id), account_role=role)
    if email and get_settings().log_user_emails:
        bind_contextvars(account_email=email)


def clear_request_context() -> None:
    """Clear all request-scoped context."""
    clear_contextvars()
