"""Shared Temporal client for the worker process."""

import asyncio

from temporalio.client import Client

from src.memora.core.config import get_settings
from src.memora.core.logging import get_logger

logger = get_logger(__name__)

_client: Client | None = None
_connect_lock = asyncio.Lock()


async def get_temporal_client() -> Client:
    """Connect once and reuse the client; concurrent callers share one connect."""
    global _client
    async with _connect_lock:
        if _client is None:
            settings = get_settings()
            _client = await Client.connect(
                settings.temporal_host,
                namespace=settings.temporal_namespace,
            )
            logger.info(
                "Connected to Temporal",
                host=settings.temporal_host,
                namespace=settings.temporal_namespace,
            )
    return _client
