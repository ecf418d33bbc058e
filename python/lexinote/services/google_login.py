"""Google sign-in callback flow.

Validation order, all before any network call:
1. Provider reported an error        → provider_error
2. code or state missing             → missing_code
3. Stored state/verifier cookie gone → missing_oauth_session
4. state != stored state             → state_mismatch

Then: exchange the code (with the stored PKCE verifier), fetch the profile,
get-or-create the user by email, and create a session.

Sync DB calls are wrapped in run_in_threadpool.
"""

import hmac
from enum import Enum

from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from lexinote.auth.google_oauth import GoogleOAuthClient
from lexinote.errors import ApiErrorCode, UpstreamError
from lexinote.logging import get_logger
from lexinote.schemas.auth import SessionWithUser
from lexinote.services import sessions as sessions_service
from lexinote.services import users as users_service

logger = get_logger(__name__)


class OAuthFailureReason(str, Enum):
    """Reason codes surfaced to the browser as ``?authError=<reason>``."""

    PROVIDER_ERROR = "provider_error"
    MISSING_CODE = "missing_code"
    MISSING_OAUTH_SESSION = "missing_oauth_session"
    STATE_MISMATCH = "state_mismatch"
    GOOGLE_AUTH_FAILED = "google_auth_failed"


class OAuthCallbackError(Exception):
    """A callback request rejected before talking to Google.

    Attributes:
        reason: Reason code for the redirect
        detail: Server-side detail for logs only (e.g. the provider's error string)
    """

    def __init__(self, reason: OAuthFailureReason, detail: str | None = None):
        self.reason = reason
        self.detail = detail
        super().__init__(reason.value)


def validate_callback(
    *,
    code: str | None,
    state: str | None,
    error: str | None,
    stored_state: str | None,
    stored_verifier: str | None,
) -> None:
    """Run the pre-exchange checks.

    Raises:
        OAuthCallbackError: With the first failing reason.
    """
    if error:
        raise OAuthCallbackError(OAuthFailureReason.PROVIDER_ERROR, detail=error)
    if not code or not state:
        raise OAuthCallbackError(OAuthFailureReason.MISSING_CODE)
    if not stored_state or not stored_verifier:
        raise OAuthCallbackError(OAuthFailureReason.MISSING_OAUTH_SESSION)
    if not hmac.compare_digest(state.encode("utf-8"), stored_state.encode("utf-8")):
        raise OAuthCallbackError(OAuthFailureReason.STATE_MISMATCH)


async def complete_google_login(
    db: Session,
    oauth_client: GoogleOAuthClient,
    *,
    code: str | None,
    state: str | None,
    error: str | None,
    stored_state: str | None,
    stored_verifier: str | None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> SessionWithUser:
    """Finish a Google sign-in and open a session.

    Raises:
        OAuthCallbackError: If the callback fails validation.
        UpstreamError: If Google rejects the exchange or returns no email.
    """
    validate_callback(
        code=code,
        state=state,
        error=error,
        stored_state=stored_state,
        stored_verifier=stored_verifier,
    )

    tokens = await oauth_client.exchange_code(code, stored_verifier)
    profile = await oauth_client.fetch_userinfo(tokens.access_token)
    if not profile.email:
        raise UpstreamError(ApiErrorCode.E_UPSTREAM, "Google profile has no email")

    user = await run_in_threadpool(users_service.get_or_create_user_by_email, db, profile.email)
    session = await run_in_threadpool(
        sessions_service.create_session,
        db,
        user.id,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    logger.info("google_login_completed", user_id=str(user.id))
    return SessionWithUser(session=session, user=user)
