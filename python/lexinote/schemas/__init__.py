"""Pydantic schemas for request/response models.

All schemas are re-exported here for convenient imports.
"""

from lexinote.schemas.auth import (
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    CredentialsRequest,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    SessionOut,
    SessionWithUser,
    UserOut,
)
from lexinote.schemas.notes import NoteCreate, NoteOut
from lexinote.schemas.translate import LanguageOut, ProviderOut, TranslateOut, TranslateRequest

__all__ = [
    "PASSWORD_MAX_LENGTH",
    "PASSWORD_MIN_LENGTH",
    "CredentialsRequest",
    "LanguageOut",
    "LoginRequest",
    "NoteCreate",
    "NoteOut",
    "ProviderOut",
    "RegisterRequest",
    "RegisterResponse",
    "SessionOut",
    "SessionWithUser",
    "TranslateOut",
    "TranslateRequest",
    "UserOut",
]
