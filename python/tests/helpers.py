"""Test helpers for authentication and common test operations.

Provides:
- Signing a test client in (session cookie on the client's jar)
- Cookie header parsing for attribute assertions
"""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from lexinote.auth.cookies import SESSION_COOKIE_NAME
from lexinote.schemas.auth import SessionOut, UserOut
from tests.factories import create_test_session, create_test_user


def sign_in(client: TestClient, session: SessionOut) -> None:
    """Attach an existing session's cookie to the client."""
    client.cookies.set(SESSION_COOKIE_NAME, session.session_token)


def create_signed_in_user(
    client: TestClient, db: Session, email: str | None = None
) -> tuple[UserOut, SessionOut]:
    """Create a user + session and sign the client in as that user."""
    user = create_test_user(db, email=email)
    session = create_test_session(db, user.id)
    sign_in(client, session)
    return user, session


def set_cookie_headers(response) -> dict[str, str]:
    """Map cookie name → raw Set-Cookie header for a response."""
    headers = {}
    for raw in response.headers.get_list("set-cookie"):
        name = raw.split("=", 1)[0].strip()
        headers[name] = raw
    return headers
