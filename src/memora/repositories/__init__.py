"""Repository layer - data access abstraction."""

from src.memora.repositories.account import AccountRepository, normalize_email
from src.memora.repositories.base import BaseRepository
from src.memora.repositories.session import SessionRepository

__all__ = [
    "AccountRepository",
    "BaseRepository",
    "SessionRepository",
    "normalize_email",
]
