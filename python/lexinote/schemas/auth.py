"""Authentication schemas.

Password bounds follow bcrypt: it only reads the first 72 bytes, so longer
passwords are rejected instead of silently truncated.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72


class UserOut(BaseModel):
    """Public user fields. The password hash never leaves the service layer."""

    id: UUID
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SessionOut(BaseModel):
    """A persisted login session, including its raw bearer token."""

    id: UUID
    user_id: UUID
    session_token: str
    expires_at: datetime
    created_at: datetime
    ip_address: str | None = None
    user_agent: str | None = None

    model_config = ConfigDict(from_attributes=True)


@dataclass(frozen=True)
class SessionWithUser:
    """A valid session together with its owner."""

    session: SessionOut
    user: UserOut


class CredentialsRequest(BaseModel):
    """Email + password body shared by register and login."""

    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > PASSWORD_MAX_LENGTH:
            raise ValueError(f"password must be at most {PASSWORD_MAX_LENGTH} bytes")
        return value


class RegisterRequest(CredentialsRequest):
    pass


class LoginRequest(CredentialsRequest):
    pass


class RegisterResponse(BaseModel):
    id: UUID
    email: str
