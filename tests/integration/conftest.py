"""Integration test fixtures for database and HTTP client operations.

Each test gets a fresh in-memory SQLite database (aiosqlite, StaticPool so
every session shares the one connection) built from SQLModel metadata.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

from src.memora.api.dependencies import get_db_session
from src.memora.core.db import create_engine_from_url, get_session
from src.memora.core.security import TokenIssuer
from src.memora.main import create_app
from src.memora.models import Account
from src.memora.repositories import AccountRepository, SessionRepository
from src.memora.services import AccountService, AuthService
from tests.factories import DEFAULT_TEST_PASSWORD, AccountFactory

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    test_engine = create_engine_from_url(TEST_DATABASE_URL)
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session for database operations.

    The session does not auto-commit; tests that seed data must commit.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
def account_repo(db_session: AsyncSession) -> AccountRepository:
    return AccountRepository(db_session)


@pytest.fixture
def session_repo(db_session: AsyncSession) -> SessionRepository:
    return SessionRepository(db_session)


@pytest.fixture
def auth_service(
    account_repo: AccountRepository,
    session_repo: SessionRepository,
    db_session: AsyncSession,
    token_issuer: TokenIssuer,
) -> AuthService:
    return AuthService(account_repo, session_repo, db_session, token_issuer)


@pytest.fixture
def account_service(
    account_repo: AccountRepository,
    session_repo: SessionRepository,
    db_session: AsyncSession,
) -> AccountService:
    return AccountService(account_repo, session_repo, db_session)


@pytest.fixture
def create_account(db_session: AsyncSession) -> Callable[..., Awaitable[Account]]:
    """Persist an account built by AccountFactory.

    Usage: `await create_account()` or `await create_account(AccountFactory.admin())`.
    """

    async def _create(account: Account | None = None, **kwargs) -> Account:
        account = account or AccountFactory.build(**kwargs)
        db_session.add(account)
        await db_session.commit()
        return account

    return _create


@pytest.fixture
async def test_account(create_account) -> dict:
    """An active user account with the default test password."""
    account = await create_account()
    return {
        "id": str(account.id),
        "email": account.email,
        "password": DEFAULT_TEST_PASSWORD,
    }


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    """Application whose DB dependency points at the test database."""
    application = create_app()

    async def _get_test_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with get_session(engine) as session:
            yield session

    application.dependency_overrides[get_db_session] = _get_test_db_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def login(client: AsyncClient) -> Callable[..., Awaitable[dict]]:
    """Log in over HTTP and return the token bundle."""

    async def _login(email: str, password: str = DEFAULT_TEST_PASSWORD) -> dict:
        response = await client.post(
            "/api/v1/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.json()
        return response.json()

    return _login
