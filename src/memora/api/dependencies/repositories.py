"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.memora.api.dependencies.db import DBSession
from src.memora.repositories import AccountRepository, SessionRepository


def get_account_repository(session: DBSession) -> AccountRepository:
    return AccountRepository(session)


def get_session_repository(session: DBSession) -> SessionRepository:
    return SessionRepository(session)


AccountRepo = Annotated[AccountRepository, Depends(get_account_repository)]
SessionRepo = Annotated[SessionRepository, Depends(get_session_repository)]
