"""Reusable migration runner for both production and tests."""

from pathlib import Path

from alembic.config import Config

from alembic import command

PROJECT_ROOT = Path(__file__).resolve().parents[4]


def get_alembic_config(database_url: str | None = None) -> Config:
    """Build the Alembic config, optionally pointed at a specific database."""
    alembic_cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_ROOT / "src" / "alembic"))
    if database_url:
        alembic_cfg.set_main_option("sqlalchemy.url", database_url)
    return alembic_cfg


def run_migrations_sync(database_url: str | None = None) -> None:
    """Run Alembic migrations synchronously up to head.

    Args:
        database_url: Overrides settings.database_url when provided.
    """
    command.upgrade(get_alembic_config(database_url), "head")
