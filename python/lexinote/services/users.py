"""User account service layer.

Handles password accounts and Google-provisioned accounts:
- Create a password account (duplicate email → E_EMAIL_TAKEN)
- Look users up by email or id
- Get-or-create by email for Google sign-in (password_hash stays NULL)
- Verify email + password credentials

Security invariants:
- The password hash never leaves this module; callers get UserOut
- Plaintext passwords are never logged
- Unknown emails still pay for one bcrypt check
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lexinote.auth.passwords import dummy_hash, hash_password, verify_password
from lexinote.config import get_settings
from lexinote.db.models import User
from lexinote.errors import ApiErrorCode, ConflictError
from lexinote.logging import get_logger
from lexinote.schemas.auth import UserOut

logger = get_logger(__name__)


def _hash_rounds(rounds: int | None) -> int:
    return rounds if rounds is not None else get_settings().password_hash_rounds


def create_user(db: Session, email: str, password: str, *, rounds: int | None = None) -> UserOut:
    """Create a password account.

    Args:
        db: Database session.
        email: Normalized email address.
        password: Plaintext password (already length-validated).
        rounds: bcrypt cost override; defaults to PASSWORD_HASH_ROUNDS.

    Returns:
        The created user's public fields.

    Raises:
        ConflictError: E_EMAIL_TAKEN if the email is already registered.
    """
    user = User(email=email, password_hash=hash_password(password, _hash_rounds(rounds)))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(ApiErrorCode.E_EMAIL_TAKEN, "Email already registered") from None

    logger.info("user_created", user_id=str(user.id), auth_method="password")
    return UserOut.model_validate(user)


def get_user_by_email(db: Session, email: str) -> UserOut | None:
    user = db.scalar(select(User).where(User.email == email))
    return UserOut.model_validate(user) if user else None


def get_user_by_id(db: Session, user_id: UUID) -> UserOut | None:
    user = db.get(User, user_id)
    return UserOut.model_validate(user) if user else None


def get_or_create_user_by_email(db: Session, email: str) -> UserOut:
    """Return the user with this email, creating a password-less one if absent.

    Race-safe: if a concurrent insert wins, the winner's row is returned.
    """
    existing = get_user_by_email(db, email)
    if existing is not None:
        return existing

    user = User(email=email, password_hash=None)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost race: another request created it; fetch the existing one
        db.rollback()
        winner = get_user_by_email(db, email)
        if winner is None:
            raise
        return winner

    logger.info("user_created", user_id=str(user.id), auth_method="google")
    return UserOut.model_validate(user)


def verify_credentials(
    db: Session, email: str, password: str, *, rounds: int | None = None
) -> UserOut | None:
    """Check an email + password pair.

    Returns:
        The user on success; None for an unknown email, a password-less
        account, or a wrong password. The three cases are indistinguishable
        to the caller.
    """
    user = db.scalar(select(User).where(User.email == email))

    if user is None or user.password_hash is None:
        verify_password(password, dummy_hash(_hash_rounds(rounds)))
        return None

    if not verify_password(password, user.password_hash):
        return None

    return UserOut.model_validate(user)
