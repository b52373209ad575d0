"""Async engine construction and the process-wide engine."""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from src.memora.core.config import get_settings

_engine: AsyncEngine | None = None


def create_engine_from_url(
    database_url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    echo: bool = False,
) -> AsyncEngine:
    """Create an async engine for PostgreSQL (asyncpg) or SQLite (aiosqlite).

    SQLite runs every session over one shared connection, so an in-memory
    database is visible to all of them. Pool sizing only applies to server
    databases.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(
        url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
    )


def get_engine() -> AsyncEngine:
    """Engine built from settings on first use."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine_from_url(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            echo=settings.database_echo,
        )
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections. Called on API and worker shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
