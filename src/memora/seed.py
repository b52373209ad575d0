"""Seed the database with the initial superadmin, admin and user accounts.

Usage:
    python -m src.memora.seed --password 'Choose-A-Strong-One1'

Existing accounts are left untouched, so the command can be re-run safely.
"""

import argparse
import asyncio
from dataclasses import dataclass

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.memora.core.config import get_settings
from src.memora.core.db import dispose_engine, get_session
from src.memora.core.logging import get_logger, setup_logging
from src.memora.core.security import hash_password
from src.memora.models import Account, AccountRole, AccountStatus
from src.memora.repositories import AccountRepository
from src.memora.schemas.auth import RegisterRequest
from src.memora.services.base import transaction

logger = get_logger(__name__)


@dataclass(frozen=True)
class SeedAccount:
    email: str
    name: str
    role: AccountRole


SEED_ACCOUNTS = (
    SeedAccount("superadmin@memora.dev", "Super Admin", AccountRole.SUPERADMIN),
    SeedAccount("admin@memora.dev", "Admin", AccountRole.ADMIN),
    SeedAccount("user@memora.dev", "Test User", AccountRole.USER),
)


async def seed_accounts(
    session: AsyncSession,
    password: str,
    accounts: tuple[SeedAccount, ...] = SEED_ACCOUNTS,
) -> list[Account]:
    """Create whichever seed accounts do not exist yet.

    Seeded accounts are active with a verified email. All of them share
    password. Returns only the accounts created by this call.
    """
    repo = AccountRepository(session)
    created: list[Account] = []

    async with transaction(session):
        for seed in accounts:
            if await repo.exists_by_email(seed.email):
                logger.info("Seed account already exists", role=seed.role.value)
                continue

            password_hash = await asyncio.to_thread(hash_password, password)
            account = await repo.create(
                email=seed.email,
                name=seed.name,
                password_hash=password_hash,
                role=seed.role.value,
                status=AccountStatus.ACTIVE.value,
                email_verified=True,
            )
            created.append(account)
            logger.info("Seed account created", account_id=str(account.id), role=seed.role.value)

        await session.commit()

    logger.info("Seeding finished", created=len(created), total=len(accounts))
    return created


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed initial Memora accounts")
    parser.add_argument(
        "--password",
        required=True,
        help="Password for every seeded account (same strength rules as registration)",
    )
    args = parser.parse_args(argv)

    try:
        RegisterRequest(email=SEED_ACCOUNTS[0].email, password=args.password, name="seed")
    except ValidationError as e:
        parser.error("; ".join(error["msg"] for error in e.errors()))
    return args


async def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.debug, settings.log_level)

    try:
        async with get_session() as session:
            await seed_accounts(session, args.password)
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
