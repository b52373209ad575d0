"""Expired session cleanup activity."""

from temporalio import activity

from src.memora.core.db import get_session
from src.memora.repositories import SessionRepository


@activity.defn
async def cleanup_expired_sessions() -> int:
    """
    Delete sessions whose refresh token has expired.

    Idempotent: DELETE operations are inherently idempotent - running multiple
    times (or concurrently) will not cause side effects.

    Returns:
        Number of sessions deleted
    """
    activity.logger.info("Cleaning up expired sessions")

    async with get_session() as session:
        repo = SessionRepository(session)
        count = await repo.delete_expired()

    activity.logger.info(f"Deleted {count} expired sessions")
    return count
