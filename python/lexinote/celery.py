"""Celery application configuration.

Central configuration for Celery used by the worker and beat scheduler.

Usage:
    from lexinote.celery import celery_app

    # Run the sweep now instead of waiting for beat:
    celery_app.send_task("sweep_expired_sessions")
"""

from celery import Celery

from lexinote.config import get_settings

settings = get_settings()

# Create Celery app
celery_app = Celery("lexinote")

# Configure from settings
celery_app.conf.broker_url = settings.effective_celery_broker_url
celery_app.conf.result_backend = settings.effective_celery_result_backend

# Task configuration
celery_app.conf.task_serializer = "json"
celery_app.conf.result_serializer = "json"
celery_app.conf.accept_content = ["json"]
celery_app.conf.timezone = "UTC"
celery_app.conf.enable_utc = True

# Default queue
celery_app.conf.task_default_queue = "default"

# Periodic maintenance
celery_app.conf.beat_schedule = {
    "sweep-expired-sessions": {
        "task": "sweep_expired_sessions",
        "schedule": float(settings.session_sweep_interval_s),
    },
}
