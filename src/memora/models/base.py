"""Time helpers shared by the models and the session logic."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time in UTC without tzinfo.

    Columns are TIMESTAMP WITHOUT TIME ZONE holding UTC values, so every
    timestamp written or compared in the app goes through this function.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def is_expired(expires_at: datetime, now: datetime) -> bool:
    """A deadline is already past at the exact moment it is reached."""
    return expires_at <= now
