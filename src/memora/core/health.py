"""Health check and Prometheus metrics endpoints."""

import secrets
import time
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.memora.api.dependencies.db import DBSession
from src.memora.core.config import get_settings
from src.memora.core.logging import get_logger

logger = get_logger(__name__)

# Health checks and scrapes would otherwise dominate the request metrics
UNINSTRUMENTED_PATHS = ["/health", "/metrics"]


async def check_database(session: AsyncSession) -> bool:
    """Round trip to the session store."""
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed", error=str(e))
        return False
    return True


def setup_health_endpoint(app: FastAPI) -> None:
    """Register GET /health: 200 when the database answers, 503 otherwise."""

    @app.get("/health", tags=["health"])
    async def health(session: DBSession) -> JSONResponse:
        database_ok = await check_database(session)
        body: dict[str, Any] = {
            "status": "healthy" if database_ok else "unhealthy",
            "database": "healthy" if database_ok else "unhealthy",
            "timestamp": time.time(),
        }
        return JSONResponse(content=body, status_code=200 if database_ok else 503)


def metrics_key_guard(expected_key: str) -> Callable[..., Awaitable[None]]:
    """Dependency that requires X-Metrics-Key to equal expected_key."""
    api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
        if api_key is None or not secrets.compare_digest(api_key, expected_key):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    return verify_metrics_key


def setup_metrics(app: FastAPI) -> None:
    """Instrument the app and expose GET /metrics, key-protected when configured."""
    settings = get_settings()
    instrumentator = Instrumentator(excluded_handlers=UNINSTRUMENTED_PATHS).instrument(app)

    dependencies = []
    if settings.metrics_api_key:
        dependencies.append(Depends(metrics_key_guard(settings.metrics_api_key)))
    instrumentator.expose(app, endpoint="/metrics", dependencies=dependencies)
