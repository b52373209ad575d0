"""
Temporal Activities - Fine-grained, idempotent operations.

Activities should be:
1. Idempotent - Safe to retry
2. Side-effect aware - Database calls go here, not in workflows
"""

from src.memora.temporal.activities.cleanup import cleanup_expired_sessions

__all__ = ["cleanup_expired_sessions"]
