"""
Temporal Worker - Separate process from API.

Run with:
    python -m src.memora.temporal.worker
"""

import asyncio

import uvicorn
from fastapi import FastAPI
from temporalio.client import (
    Client,
    Schedule,
    ScheduleActionStartWorkflow,
    ScheduleAlreadyRunningError,
    ScheduleSpec,
)
from temporalio.worker import Worker

from src.memora.core.config import get_settings
from src.memora.core.db import dispose_engine
from src.memora.core.logging import get_logger, setup_logging
from src.memora.temporal.activities import cleanup_expired_sessions
from src.memora.temporal.client import get_temporal_client
from src.memora.temporal.workflows import SessionCleanupWorkflow

logger = get_logger(__name__)

WORKER_HEALTH_PORT = 8001
SESSION_CLEANUP_SCHEDULE_ID = "session-cleanup"
SESSION_CLEANUP_WORKFLOW_ID = "session-cleanup-run"


def build_session_cleanup_schedule(cron: str, task_queue: str) -> Schedule:
    """Schedule that starts SessionCleanupWorkflow on a cron expression."""
    return Schedule(
        action=ScheduleActionStartWorkflow(
            SessionCleanupWorkflow.run,
            id=SESSION_CLEANUP_WORKFLOW_ID,
            task_queue=task_queue,
        ),
        spec=ScheduleSpec(cron_expressions=[cron]),
    )


async def ensure_session_cleanup_schedule(client: Client, cron: str, task_queue: str) -> None:
    """Create the cleanup schedule; an existing one is kept as is."""
    try:
        await client.create_schedule(
            SESSION_CLEANUP_SCHEDULE_ID,
            build_session_cleanup_schedule(cron, task_queue),
        )
        logger.info("Created session cleanup schedule", cron=cron)
    except ScheduleAlreadyRunningError:
        logger.info("Session cleanup schedule already exists", schedule_id=SESSION_CLEANUP_SCHEDULE_ID)


def create_worker(client: Client, task_queue: str) -> Worker:
    return Worker(
        client,
        task_queue=task_queue,
        workflows=[SessionCleanupWorkflow],
        activities=[cleanup_expired_sessions],
        max_concurrent_activities=50,
        max_concurrent_workflow_tasks=50,
    )


async def run_health_server(task_queue: str, port: int = WORKER_HEALTH_PORT) -> None:
    """Run a lightweight health server for K8s liveness checks."""
    health_app = FastAPI(title="Temporal Worker Health")

    @health_app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": "temporal-worker",
            "task_queue": task_queue,
        }

    config = uvicorn.Config(health_app, host="0.0.0.0", port=port, log_level="warning")
    server = uvicorn.Server(config)
    logger.info("Starting worker health server", port=port)
    await server.serve()


async def main() -> None:
    """Main entry point for the Temporal worker."""
    settings = get_settings()
    setup_logging(settings.debug, settings.log_level)

    client = await get_temporal_client()
    task_queue = settings.temporal_task_queue

    if settings.session_cleanup_schedule:
        await ensure_session_cleanup_schedule(
            client, settings.session_cleanup_schedule, task_queue
        )

    worker = create_worker(client, task_queue)
    logger.info("Starting worker", task_queue=task_queue)

    try:
        await asyncio.gather(worker.run(), run_health_server(task_queue))
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
