"""
Session Cleanup Workflow.

Sweeps sessions whose refresh token expired. Reads already treat expired
sessions as invalid and purge them on touch; this removes the ones nobody
touches. Designed to be run on a Temporal schedule.
"""

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from src.memora.temporal.activities import cleanup_expired_sessions


@workflow.defn
class SessionCleanupWorkflow:
    """Delete expired sessions. Safe to run concurrently or repeatedly."""

    @workflow.run
    async def run(self) -> int:
        workflow.logger.info("Starting expired session cleanup")

        count = await workflow.execute_activity(
            cleanup_expired_sessions,
            start_to_close_timeout=timedelta(minutes=5),
            retry_policy=RetryPolicy(
                maximum_attempts=3,
                initial_interval=timedelta(seconds=2),
            ),
        )

        workflow.logger.info(f"Session cleanup complete: {count} deleted")
        return count
