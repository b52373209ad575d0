"""Database utilities - engine, session, migrations."""

from src.memora.core.db.engine import create_engine_from_url, dispose_engine, get_engine
from src.memora.core.db.migrations import get_alembic_config, run_migrations_sync
from src.memora.core.db.session import get_session

__all__ = [
    # Engine
    "create_engine_from_url",
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    # Migrations
    "get_alembic_config",
    "run_migrations_sync",
]
