"""Tests for the account seeding command."""

import pytest

from src.memora.core.security import verify_password
from src.memora.seed import SEED_ACCOUNTS, parse_args, seed_accounts
from tests.factories import AccountFactory

pytestmark = pytest.mark.integration

SEED_PASSWORD = "Seeded-Password1"


async def test_seeds_one_account_per_role(db_session, account_repo):
    created = await seed_accounts(db_session, SEED_PASSWORD)

    assert [account.role for account in created] == ["superadmin", "admin", "user"]
    for seed in SEED_ACCOUNTS:
        account = await account_repo.get_by_email(seed.email)
        assert account is not None
        assert account.status == "active"
        assert account.email_verified is True
        assert account.password_hash != SEED_PASSWORD
        assert verify_password(SEED_PASSWORD, account.password_hash)


async def test_rerun_skips_existing_accounts(db_session, create_account, account_repo):
    existing = await create_account(AccountFactory.admin(email=SEED_ACCOUNTS[1].email))

    first = await seed_accounts(db_session, SEED_PASSWORD)
    second = await seed_accounts(db_session, SEED_PASSWORD)

    assert [account.email for account in first] == [
        SEED_ACCOUNTS[0].email,
        SEED_ACCOUNTS[2].email,
    ]
    assert second == []
    # The pre-existing account keeps its own password
    kept = await account_repo.get_by_email(existing.email)
    assert not verify_password(SEED_PASSWORD, kept.password_hash)


async def test_seeded_admin_can_log_in(client, db_session, login):
    await seed_accounts(db_session, SEED_PASSWORD)

    tokens = await login(SEED_ACCOUNTS[1].email, SEED_PASSWORD)

    assert tokens["user"]["role"] == "admin"


def test_weak_seed_password_rejected():
    with pytest.raises(SystemExit):
        parse_args(["--password", "password"])


def test_seed_password_accepted():
    assert parse_args(["--password", SEED_PASSWORD]).password == SEED_PASSWORD
