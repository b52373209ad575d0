"""Account and session factories for test data generation."""

from datetime import timedelta

from polyfactory import Use

from src.memora.core.security import hash_password
from src.memora.models import Account, AccountRole, AccountStatus, AuthSession
from tests.factories.base import BaseFactory, generate_uuid, utc_now

# Satisfies the registration password rules
DEFAULT_TEST_PASSWORD = "Password123!"


class AccountFactory(BaseFactory):
    """Factory for generating Account test data."""

    __model__ = Account

    id = Use(generate_uuid)
    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    name = "Test User"
    password_hash = Use(lambda: hash_password(DEFAULT_TEST_PASSWORD))
    role = AccountRole.USER.value
    status = AccountStatus.ACTIVE.value
    email_verified = True
    last_login_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def admin(cls, **kwargs):
        """Create an admin account."""
        return cls.build(role=AccountRole.ADMIN.value, **kwargs)

    @classmethod
    def superadmin(cls, **kwargs):
        """Create a superadmin account."""
        return cls.build(role=AccountRole.SUPERADMIN.value, **kwargs)

    @classmethod
    def with_status(cls, status: AccountStatus, **kwargs):
        """Create an account in a non-default status."""
        return cls.build(status=status.value, **kwargs)

    @classmethod
    def without_password(cls, **kwargs):
        """Create an account that authenticates through an external provider."""
        return cls.build(password_hash=None, **kwargs)


class AuthSessionFactory(BaseFactory):
    """Factory for generating AuthSession test data."""

    __model__ = AuthSession

    id = Use(generate_uuid)
    # FK field - must be set explicitly
    account_id = None
    refresh_token = Use(lambda: f"refresh-{generate_uuid().hex}")
    expires_at = Use(lambda: utc_now() + timedelta(days=7))
    device_info = None
    ip_address = None
    created_at = Use(utc_now)

    @classmethod
    def expired(cls, **kwargs):
        """Create a session that expired an hour ago."""
        return cls.build(expires_at=utc_now() - timedelta(hours=1), **kwargs)
