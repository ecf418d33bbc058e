"""ORM sessions for routes, the auth middleware and Celery tasks.

- Routes receive a request-scoped session through ``get_db``
- The auth middleware and the sweep task open their own short-lived
  sessions from ``get_session_factory()``
- Service functions wrap every write in ``transaction(db)``

Sessions do not expire attributes on commit, so service functions can build
their response schemas from rows they just wrote.
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from lexinote.db.engine import get_engine

_session_factory: sessionmaker[Session] | None = None


def create_session_factory(engine: Engine | None = None) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine if engine is not None else get_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


def get_session_factory() -> sessionmaker[Session]:
    """Factory bound to the application engine, created on first use."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory()
    return _session_factory


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Generator[None, None, None]:
    """Commit the block's writes, or roll them back if it raises."""
    try:
        yield
        db.commit()
    except Exception:
        db.rollback()
        raise
