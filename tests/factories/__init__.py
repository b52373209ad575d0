"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import AccountFactory, AuthSessionFactory
"""

from tests.factories.account import DEFAULT_TEST_PASSWORD, AccountFactory, AuthSessionFactory
from tests.factories.base import BaseFactory, generate_uuid, utc_now

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Accounts
    "AccountFactory",
    "AuthSessionFactory",
    "DEFAULT_TEST_PASSWORD",
]
