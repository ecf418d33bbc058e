"""Authentication routes.

- POST /auth/register: create a password account
- POST /auth/login: verify credentials, open a session, set the cookie
- POST /auth/logout: delete the presented session, clear the cookie
- GET /auth/me: the signed-in user
- GET /auth/google: start Google sign-in (sets OAuth cookies, redirects)
- GET /auth/google/callback: finish Google sign-in, redirect back to /

The callback never returns an error envelope: every outcome is a redirect to
``/?authSuccess=google`` or ``/?authError=<reason>``, and both OAuth cookies
are cleared on every path.
"""

from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from lexinote.api.deps import get_db, get_http_client, get_settings
from lexinote.auth.cookies import (
    OAUTH_STATE_COOKIE_NAME,
    OAUTH_VERIFIER_COOKIE_NAME,
    SESSION_COOKIE_NAME,
    clear_oauth_cookies,
    clear_session_cookie,
    set_oauth_cookies,
    set_session_cookie,
)
from lexinote.auth.google_oauth import GoogleOAuthClient, GoogleOAuthConfig, start_google_auth
from lexinote.auth.middleware import Viewer, get_viewer
from lexinote.config import Settings
from lexinote.errors import ApiErrorCode, UnauthenticatedError
from lexinote.logging import get_logger
from lexinote.responses import success_response
from lexinote.schemas.auth import LoginRequest, RegisterRequest, RegisterResponse
from lexinote.services import google_login
from lexinote.services import sessions as sessions_service
from lexinote.services import users as users_service
from lexinote.services.google_login import OAuthCallbackError, OAuthFailureReason

logger = get_logger(__name__)

router = APIRouter(tags=["auth"])

# Where the browser lands after Google sign-in
POST_LOGIN_REDIRECT = "/"


def client_ip(request: Request) -> str | None:
    """First X-Forwarded-For hop, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else None


@router.post("/auth/register", status_code=201)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Create a password account.

    Does not sign the user in.

    Errors:
        E_EMAIL_TAKEN (409): Email already registered
        E_INVALID_REQUEST (400): Malformed email or password outside 8-72 chars
    """
    user = users_service.create_user(db, body.email, body.password)
    return success_response(RegisterResponse(id=user.id, email=user.email).model_dump(mode="json"))


@router.post("/auth/login")
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Sign in with email + password.

    Errors:
        E_INVALID_CREDENTIALS (401): Unknown email, wrong password, or a Google-only account
    """
    user = users_service.verify_credentials(db, body.email, body.password)
    if user is None:
        logger.info("login_failed")
        raise UnauthenticatedError(ApiErrorCode.E_INVALID_CREDENTIALS, "Invalid credentials")

    session = sessions_service.create_session(
        db,
        user.id,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    set_session_cookie(
        response, session.session_token, session.expires_at, secure=settings.cookie_secure
    )
    return success_response({"user": user.model_dump(mode="json")})


@router.post("/auth/logout")
def logout(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Delete the presented session (if any) and clear the cookie."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    if token:
        sessions_service.delete_session(db, token)
    clear_session_cookie(response, secure=settings.cookie_secure)
    return success_response({"success": True})


@router.get("/auth/me")
def me(
    viewer: Annotated[Viewer, Depends(get_viewer)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    user = users_service.get_user_by_id(db, viewer.user_id)
    if user is None:
        raise UnauthenticatedError()
    return success_response({"user": user.model_dump(mode="json")})


@router.get("/auth/google")
def google_start(settings: Annotated[Settings, Depends(get_settings)]) -> RedirectResponse:
    """Redirect to Google with fresh state and PKCE challenge.

    Errors:
        E_OAUTH_NOT_CONFIGURED (503): Google client credentials missing
    """
    start = start_google_auth(GoogleOAuthConfig.from_settings(settings))
    response = RedirectResponse(start.authorization_url, status_code=307)
    set_oauth_cookies(
        response,
        start.state,
        start.code_verifier,
        max_age=settings.oauth_cookie_max_age_s,
        secure=settings.cookie_secure,
    )
    return response


@router.get("/auth/google/callback")
async def google_callback(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Finish Google sign-in. Always redirects to the app root."""
    secure = settings.cookie_secure

    try:
        oauth_client = GoogleOAuthClient(http_client, GoogleOAuthConfig.from_settings(settings))
        result = await google_login.complete_google_login(
            db,
            oauth_client,
            code=code,
            state=state,
            error=error,
            stored_state=request.cookies.get(OAUTH_STATE_COOKIE_NAME),
            stored_verifier=request.cookies.get(OAUTH_VERIFIER_COOKIE_NAME),
            ip_address=client_ip(request),
            user_agent=request.headers.get("user-agent"),
        )
    except OAuthCallbackError as e:
        logger.warning("google_oauth_callback_failed", reason=e.reason.value, detail=e.detail)
        response = RedirectResponse(f"{POST_LOGIN_REDIRECT}?authError={e.reason.value}")
    except Exception:
        logger.exception(
            "google_oauth_callback_failed", reason=OAuthFailureReason.GOOGLE_AUTH_FAILED.value
        )
        response = RedirectResponse(
            f"{POST_LOGIN_REDIRECT}?authError={OAuthFailureReason.GOOGLE_AUTH_FAILED.value}"
        )
    else:
        response = RedirectResponse(f"{POST_LOGIN_REDIRECT}?authSuccess=google")
        set_session_cookie(
            response, result.session.session_token, result.session.expires_at, secure=secure
        )

    clear_oauth_cookies(response, secure=secure)
    return response
