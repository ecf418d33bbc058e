"""Cookie names and attributes.

All cookies are HttpOnly, SameSite=Lax, Path=/, and Secure outside
local/test environments.
"""

from datetime import datetime

from starlette.responses import Response

SESSION_COOKIE_NAME = "lexinote_session"
OAUTH_STATE_COOKIE_NAME = "lexinote_google_oauth_state"
OAUTH_VERIFIER_COOKIE_NAME = "lexinote_google_oauth_verifier"

COOKIE_PATH = "/"
COOKIE_SAMESITE = "lax"


def set_session_cookie(
    response: Response, token: str, expires_at: datetime, *, secure: bool
) -> None:
    """Attach the session cookie. ``expires_at`` must be timezone-aware."""
    response.set_cookie(
        SESSION_COOKIE_NAME,
        token,
        expires=expires_at,
        path=COOKIE_PATH,
        secure=secure,
        httponly=True,
        samesite=COOKIE_SAMESITE,
    )


def clear_session_cookie(response: Response, *, secure: bool) -> None:
    response.delete_cookie(
        SESSION_COOKIE_NAME,
        path=COOKIE_PATH,
        secure=secure,
        httponly=True,
        samesite=COOKIE_SAMESITE,
    )


def set_oauth_cookies(
    response: Response, state: str, code_verifier: str, *, max_age: int, secure: bool
) -> None:
    """Store the OAuth state and PKCE verifier for the callback."""
    for name, value in (
        (OAUTH_STATE_COOKIE_NAME, state),
        (OAUTH_VERIFIER_COOKIE_NAME, code_verifier),
    ):
        response.set_cookie(
            name,
            value,
            max_age=max_age,
            path=COOKIE_PATH,
            secure=secure,
            httponly=True,
            samesite=COOKIE_SAMESITE,
        )


def clear_oauth_cookies(response: Response, *, secure: bool) -> None:
    for name in (OAUTH_STATE_COOKIE_NAME, OAUTH_VERIFIER_COOKIE_NAME):
        response.delete_cookie(
            name,
            path=COOKIE_PATH,
            secure=secure,
            httponly=True,
            samesite=COOKIE_SAMESITE,
        )
