"""Celery tasks for Lexinote.

Tasks are explicitly imported here to register them with Celery.
No autodiscovery - all tasks must be imported in this module.

Usage in worker:
    from lexinote.tasks import sweep_expired_sessions
"""

from lexinote.tasks.sweep_expired_sessions import sweep_expired_sessions

__all__ = ["sweep_expired_sessions"]
