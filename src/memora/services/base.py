"""Transaction handling shared by the services."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.memora.core.exceptions import InternalError
from src.memora.core.logging import get_logger

logger = get_logger(__name__)

STORE_UNAVAILABLE = "Session store unavailable"


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncGenerator[None, None]:
    """Roll the session back on any failure before the error leaves the block.

    Store failures are re-raised as InternalError with the driver error as
    its cause; every other exception propagates unchanged. Committing is
    left to the block so that tokens are only handed out after the commit.
    """
    try:
        yield
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Store failure", error_type=type(e).__name__, exc_info=e)
        raise InternalError(STORE_UNAVAILABLE) from e
    except Exception:
        await session.rollback()
        raise
