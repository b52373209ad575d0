"""Temporal Workflows - Re-exports for worker registration."""

from src.memora.temporal.workflows.session_cleanup import SessionCleanupWorkflow

__all__ = ["SessionCleanupWorkflow"]
