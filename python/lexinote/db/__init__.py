"""Database module for Lexinote.

Provides engine creation, session management, transaction helpers, and ORM models.
"""

from lexinote.db.engine import create_db_engine, get_engine
from lexinote.db.models import AuthSession, Base, TranslationNote, User
from lexinote.db.session import get_db, transaction

__all__ = [
    # Engine and session
    "create_db_engine",
    "get_engine",
    "get_db",
    "transaction",
    # Models
    "Base",
    "User",
    "AuthSession",
    "TranslationNote",
]
