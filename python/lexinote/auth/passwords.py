"""Password hashing with bcrypt.

Hashes carry their own salt and cost factor, so changing
PASSWORD_HASH_ROUNDS only affects new hashes.
"""

from functools import lru_cache

import bcrypt

DEFAULT_ROUNDS = 10


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password with a fresh random salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("ascii")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a password against a stored hash.

    Returns False for a missing or malformed hash; never raises.
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        return False


@lru_cache(maxsize=4)
def dummy_hash(rounds: int = DEFAULT_ROUNDS) -> str:
    """A throwaway hash used to equalize timing for unknown accounts."""
    return hash_password("lexinote-dummy-password", rounds)
