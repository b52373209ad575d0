"""Shared enums for models."""

from enum import Enum


class AccountRole(str, Enum):
    """Account role. A superadmin satisfies any admin requirement."""

    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class AccountStatus(str, Enum):
    """Account lifecycle status. Accounts are never hard-deleted."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class TokenType(str, Enum):
    """Discriminator embedded in every signed token."""

    ACCESS = "access"
    REFRESH = "refresh"
