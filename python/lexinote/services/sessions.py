"""Login session service layer.

Sessions are opaque random tokens stored server-side:
- Created on login / Google sign-in with a fixed TTL (SESSION_TTL_DAYS)
- Valid only while a matching, unexpired row exists
- Expiry is enforced lazily: a lookup that finds an expired row deletes it
- Deleted on logout; bulk-deleted per user or by the expiry sweep

A user may hold any number of concurrent sessions. No locks are taken.
"""

import secrets
from datetime import UTC, datetime, timedelta
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from lexinote.config import get_settings
from lexinote.db.models import AuthSession, User, utcnow
from lexinote.db.session import transaction
from lexinote.logging import get_logger
from lexinote.schemas.auth import SessionOut, SessionWithUser, UserOut

logger = get_logger(__name__)

# 32 random bytes → 43 url-safe characters
SESSION_TOKEN_BYTES = 32


def _ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on load)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_out(row: AuthSession) -> SessionOut:
    return SessionOut(
        id=row.id,
        user_id=row.user_id,
        session_token=row.session_token,
        expires_at=_ensure_utc(row.expires_at),
        created_at=_ensure_utc(row.created_at),
        ip_address=row.ip_address,
        user_agent=row.user_agent,
    )


def generate_session_token() -> str:
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)


def create_session(
    db: Session,
    user_id: UUID,
    ip_address: str | None = None,
    user_agent: str | None = None,
    *,
    ttl_days: int | None = None,
) -> SessionOut:
    """Create a new session for a user.

    Args:
        db: Database session.
        user_id: Owner of the session.
        ip_address: Client address, informational only.
        user_agent: Client user agent, informational only.
        ttl_days: Lifetime override; defaults to SESSION_TTL_DAYS.

    Returns:
        The stored session, including the raw token for the cookie.
    """
    if ttl_days is None:
        ttl_days = get_settings().session_ttl_days

    now = utcnow()
    row = AuthSession(
        user_id=user_id,
        session_token=generate_session_token(),
        expires_at=now + timedelta(days=ttl_days),
        created_at=now,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    with transaction(db):
        db.add(row)

    logger.info("session_created", user_id=str(user_id), session_id=str(row.id))
    return _to_out(row)


def get_session_by_token(db: Session, token: str | None) -> SessionOut | None:
    """Look up a live session by its token.

    An expired row is deleted (and committed) before None is returned.
    """
    if not token:
        return None

    row = db.scalar(select(AuthSession).where(AuthSession.session_token == token))
    if row is None:
        return None

    if _ensure_utc(row.expires_at) <= utcnow():
        session_id = str(row.id)
        with transaction(db):
            db.delete(row)
        logger.info("session_expired", session_id=session_id)
        return None

    return _to_out(row)


def get_session_with_user(db: Session, token: str | None) -> SessionWithUser | None:
    """Resolve a token to its session and owner, or None."""
    session = get_session_by_token(db, token)
    if session is None:
        return None

    user = db.get(User, session.user_id)
    if user is None:
        return None

    return SessionWithUser(session=session, user=UserOut.model_validate(user))


def delete_session(db: Session, token: str) -> None:
    """Delete the session with this token. Deleting a missing token is a no-op."""
    with transaction(db):
        db.execute(delete(AuthSession).where(AuthSession.session_token == token))


def delete_user_sessions(db: Session, user_id: UUID) -> int:
    """Revoke every session of a user. Returns the number deleted."""
    with transaction(db):
        result = db.execute(delete(AuthSession).where(AuthSession.user_id == user_id))

    logger.info("user_sessions_revoked", user_id=str(user_id), count=result.rowcount)
    return result.rowcount


def clean_expired_sessions(db: Session) -> int:
    """Delete all expired sessions. Returns the number deleted."""
    with transaction(db):
        result = db.execute(
            delete(AuthSession)
            .where(AuthSession.expires_at <= utcnow())
            .execution_options(synchronize_session=False)
        )
    return result.rowcount


def create_session_resolver(session_factory):
    """Create the token → SessionWithUser callback used by the auth middleware.

    Each call opens and closes its own short-lived database session.

    Args:
        session_factory: A sessionmaker for the application database.

    Returns:
        A function(token) -> SessionWithUser | None.
    """

    def resolve(token: str) -> SessionWithUser | None:
        db = session_factory()
        try:
            return get_session_with_user(db, token)
        finally:
            db.close()

    return resolve
