"""Integration tests for AccountRepository."""

import pytest
from sqlalchemy.exc import IntegrityError

from src.memora.repositories import AccountRepository
from src.memora.repositories.account import normalize_email

pytestmark = pytest.mark.integration


def test_normalize_email():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


async def test_create_normalizes_email(account_repo: AccountRepository, db_session):
    account = await account_repo.create(email="Alice@Example.com", name="Alice")
    await db_session.commit()

    assert account.email == "alice@example.com"
    assert (await account_repo.get_by_email("ALICE@example.com")).id == account.id
    assert await account_repo.exists_by_email(" alice@EXAMPLE.com ")


async def test_email_is_unique(account_repo: AccountRepository):
    await account_repo.create(email="bob@example.com", name="Bob")

    with pytest.raises(IntegrityError):
        await account_repo.create(email="BOB@example.com", name="Bob again")


async def test_get_missing(account_repo: AccountRepository):
    assert await account_repo.get_by_email("ghost@example.com") is None
    assert not await account_repo.exists_by_email("ghost@example.com")


async def test_update_last_login(account_repo: AccountRepository, db_session, create_account):
    account = await create_account()
    assert account.last_login_at is None

    await account_repo.update_last_login(account.id)
    await db_session.commit()
    await db_session.refresh(account)

    assert account.last_login_at is not None
