"""Model exports.

Import from here: `from src.memora.models import Account, AuthSession`
"""

from src.memora.models.account import Account
from src.memora.models.enums import AccountRole, AccountStatus, TokenType
from src.memora.models.session import AuthSession

__all__ = [
    # Enums
    "AccountRole",
    "AccountStatus",
    "TokenType",
    # Models
    "Account",
    "AuthSession",
]
