"""Celery worker entrypoint.

Run with:
    celery -A apps.worker.main:celery_app worker --loglevel=info
    celery -A apps.worker.main:celery_app beat --loglevel=info

This module imports the Celery app and explicitly registers all tasks.
Task definitions are in the lexinote.tasks package - no autodiscovery.

Logging Convention:
- All task log entries include request_id, task_name, task_id when available
- Use configure_task_logging() at the start of each task to set up context

Scheduled Jobs:
- sweep_expired_sessions: every SESSION_SWEEP_INTERVAL_S (default 1 hour)
"""

from celery.signals import worker_process_init

from lexinote.celery import celery_app
from lexinote.logging import configure_logging, get_logger

# Import tasks to register them with Celery
from lexinote.tasks import sweep_expired_sessions  # noqa: F401


@worker_process_init.connect
def setup_worker_logging(**kwargs):
    """Configure structlog when worker process starts.

    Worker logs then use the same JSON structured format as the API.
    """
    configure_logging()
    logger = get_logger(__name__)
    logger.info("celery_worker_started", queue="default")


# Export celery_app for Celery to find
__all__ = ["celery_app"]
