"""Expired session sweeper task.

Celery beat job: sweep_expired_sessions (every SESSION_SWEEP_INTERVAL_S)
- Deletes every session whose expires_at has passed
- Lookups already delete expired rows lazily; this reclaims rows for
  tokens that are never presented again
- Logs the count
"""

from lexinote.celery import celery_app
from lexinote.db.session import get_session_factory
from lexinote.logging import clear_task_context, configure_task_logging, get_logger
from lexinote.services.sessions import clean_expired_sessions

logger = get_logger(__name__)


def run_session_sweep() -> int:
    """Delete expired sessions in a fresh database session.

    Returns:
        Number of sessions deleted.
    """
    # Worker doesn't use FastAPI DI
    session_factory = get_session_factory()
    db = session_factory()
    try:
        deleted = clean_expired_sessions(db)
    finally:
        db.close()

    logger.info("expired_sessions_swept", deleted_count=deleted)
    return deleted


@celery_app.task(bind=True, max_retries=0, name="sweep_expired_sessions")
def sweep_expired_sessions(self, request_id: str | None = None) -> dict:
    """Periodic sweep of expired login sessions.

    Args:
        request_id: Optional request ID for log correlation.

    Returns:
        Dict with the number of deleted sessions.
    """
    configure_task_logging(
        request_id=request_id, task_name="sweep_expired_sessions", task_id=self.request.id
    )
    try:
        return {"status": "ok", "deleted_count": run_session_sweep()}
    except Exception as e:
        logger.error("sweep_expired_sessions_failed", error=str(e))
        raise
    finally:
        clear_task_context()
