"""Integration tests for Google sign-in routes.

Tests cover:
- GET /auth/google: redirect + OAuth cookies, 503 when unconfigured
- GET /auth/google/callback: each rejection reason, success, upstream failures
- OAuth cookies are cleared on every callback outcome

Google's token and userinfo endpoints are mocked with respx.
"""

import asyncio
from collections.abc import Generator
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
import respx
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from lexinote.auth.cookies import (
    OAUTH_STATE_COOKIE_NAME,
    OAUTH_VERIFIER_COOKIE_NAME,
    SESSION_COOKIE_NAME,
)
from lexinote.auth.google_oauth import (
    GOOGLE_AUTHORIZATION_URL,
    GOOGLE_TOKEN_URL,
    GOOGLE_USERINFO_URL,
    GoogleOAuthClient,
    GoogleOAuthConfig,
)
from lexinote.config import clear_settings_cache
from lexinote.db.models import AuthSession, User
from lexinote.services import sessions as sessions_service
from lexinote.services import users as users_service
from lexinote.services.google_login import complete_google_login
from tests.factories import create_test_user
from tests.helpers import set_cookie_headers

CALLBACK = "/auth/google/callback"


@pytest.fixture
def google_client(monkeypatch, app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client for an app with Google sign-in configured."""
    monkeypatch.setenv("GOOGLE_CLIENT_ID", "client-id")
    monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "client-secret")
    monkeypatch.setenv("GOOGLE_REDIRECT_URI", "http://testserver/auth/google/callback")
    clear_settings_cache()
    with TestClient(app) as client:
        yield client


def _cookie_value(raw: str) -> str:
    return raw.split(";", 1)[0].split("=", 1)[1]


def _with_oauth_session(client: TestClient, state: str = "state-123") -> None:
    client.cookies.set(OAUTH_STATE_COOKIE_NAME, state)
    client.cookies.set(OAUTH_VERIFIER_COOKIE_NAME, "verifier-abc")


def _assert_oauth_cookies_cleared(response) -> None:
    cookies = set_cookie_headers(response)
    for name in (OAUTH_STATE_COOKIE_NAME, OAUTH_VERIFIER_COOKIE_NAME):
        assert "max-age=0" in cookies[name].lower()


def _mock_google(email: str | None = "g@example.com"):
    token = respx.post(GOOGLE_TOKEN_URL).respond(
        200, json={"access_token": "ya29.token", "token_type": "Bearer", "expires_in": 3599}
    )
    profile = {"sub": "1234567890", "email_verified": True}
    if email is not None:
        profile["email"] = email
    userinfo = respx.get(GOOGLE_USERINFO_URL).respond(200, json=profile)
    return token, userinfo


class TestGoogleStart:
    def test_redirects_to_google_with_cookies(self, google_client: TestClient):
        response = google_client.get("/auth/google", follow_redirects=False)

        assert response.status_code == 307
        location = response.headers["location"]
        assert location.startswith(GOOGLE_AUTHORIZATION_URL)

        params = parse_qs(urlparse(location).query)
        cookies = set_cookie_headers(response)
        assert _cookie_value(cookies[OAUTH_STATE_COOKIE_NAME]) == params["state"][0]
        for name in (OAUTH_STATE_COOKIE_NAME, OAUTH_VERIFIER_COOKIE_NAME):
            raw = cookies[name].lower()
            assert "max-age=600" in raw
            assert "httponly" in raw
            assert "samesite=lax" in raw

    def test_fresh_state_per_request(self, google_client: TestClient):
        first = google_client.get("/auth/google", follow_redirects=False)
        second = google_client.get("/auth/google", follow_redirects=False)
        assert first.headers["location"] != second.headers["location"]

    def test_unconfigured_returns_503(self, client: TestClient):
        response = client.get("/auth/google", follow_redirects=False)

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "E_OAUTH_NOT_CONFIGURED"


class TestCallbackRejections:
    @respx.mock(assert_all_called=False)
    def test_provider_error(self, google_client: TestClient):
        token, _ = _mock_google()
        _with_oauth_session(google_client)

        response = google_client.get(
            CALLBACK, params={"error": "access_denied"}, follow_redirects=False
        )

        assert response.status_code == 307
        assert response.headers["location"] == "/?authError=provider_error"
        assert not token.called
        _assert_oauth_cookies_cleared(response)

    @respx.mock(assert_all_called=False)
    def test_missing_code(self, google_client: TestClient):
        token, _ = _mock_google()
        _with_oauth_session(google_client)

        response = google_client.get(CALLBACK, params={"state": "state-123"}, follow_redirects=False)

        assert response.headers["location"] == "/?authError=missing_code"
        assert not token.called
        _assert_oauth_cookies_cleared(response)

    @respx.mock(assert_all_called=False)
    def test_missing_oauth_session(self, google_client: TestClient):
        token, _ = _mock_google()

        response = google_client.get(
            CALLBACK, params={"code": "abc", "state": "state-123"}, follow_redirects=False
        )

        assert response.headers["location"] == "/?authError=missing_oauth_session"
        assert not token.called
        _assert_oauth_cookies_cleared(response)

    @respx.mock(assert_all_called=False)
    def test_state_mismatch(self, google_client: TestClient, db_session: Session):
        token, _ = _mock_google()
        _with_oauth_session(google_client, state="expected")

        response = google_client.get(
            CALLBACK, params={"code": "abc", "state": "forged"}, follow_redirects=False
        )

        assert response.headers["location"] == "/?authError=state_mismatch"
        assert not token.called
        assert SESSION_COOKIE_NAME not in set_cookie_headers(response)
        assert db_session.scalar(select(func.count()).select_from(AuthSession)) == 0
        _assert_oauth_cookies_cleared(response)

    def test_unconfigured_callback_fails_softly(self, client: TestClient):
        _with_oauth_session(client)

        response = client.get(
            CALLBACK, params={"code": "abc", "state": "state-123"}, follow_redirects=False
        )

        assert response.headers["location"] == "/?authError=google_auth_failed"
        _assert_oauth_cookies_cleared(response)


class TestCallbackSuccess:
    @respx.mock
    def test_new_user_signed_in(self, google_client: TestClient, db_session: Session):
        token, userinfo = _mock_google("new.google@example.com")
        _with_oauth_session(google_client)

        response = google_client.get(
            CALLBACK, params={"code": "auth-code", "state": "state-123"}, follow_redirects=False
        )

        assert response.status_code == 307
        assert response.headers["location"] == "/?authSuccess=google"
        assert SESSION_COOKIE_NAME in set_cookie_headers(response)
        _assert_oauth_cookies_cleared(response)

        form = parse_qs(token.calls.last.request.content.decode())
        assert form["code"] == ["auth-code"]
        assert form["code_verifier"] == ["verifier-abc"]
        assert userinfo.calls.last.request.headers["authorization"] == "Bearer ya29.token"

        user = db_session.scalar(select(User).where(User.email == "new.google@example.com"))
        assert user is not None
        assert user.password_hash is None

        me = google_client.get("/auth/me")
        assert me.status_code == 200
        assert me.json()["data"]["user"]["email"] == "new.google@example.com"

    @respx.mock
    def test_existing_password_account_is_linked(
        self, google_client: TestClient, db_session: Session
    ):
        existing = create_test_user(db_session, email="both@example.com")
        _mock_google("both@example.com")
        _with_oauth_session(google_client)

        response = google_client.get(
            CALLBACK, params={"code": "auth-code", "state": "state-123"}, follow_redirects=False
        )

        assert response.headers["location"] == "/?authSuccess=google"
        assert db_session.scalar(select(func.count()).select_from(User)) == 1
        session_row = db_session.scalar(select(AuthSession))
        assert session_row.user_id == existing.id


class TestCallbackFailures:
    @respx.mock(assert_all_called=False)
    def test_token_exchange_rejected(self, google_client: TestClient):
        respx.post(GOOGLE_TOKEN_URL).respond(400, json={"error": "invalid_grant"})
        _with_oauth_session(google_client)

        response = google_client.get(
            CALLBACK, params={"code": "stale", "state": "state-123"}, follow_redirects=False
        )

        assert response.headers["location"] == "/?authError=google_auth_failed"
        assert SESSION_COOKIE_NAME not in set_cookie_headers(response)
        _assert_oauth_cookies_cleared(response)

    @respx.mock
    def test_profile_without_email(self, google_client: TestClient):
        _mock_google(email=None)
        _with_oauth_session(google_client)

        response = google_client.get(
            CALLBACK, params={"code": "auth-code", "state": "state-123"}, follow_redirects=False
        )

        assert response.headers["location"] == "/?authError=google_auth_failed"

    @respx.mock
    def test_user_creation_failure(self, google_client: TestClient, monkeypatch):
        _mock_google()
        _with_oauth_session(google_client)

        def boom(db, email):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(users_service, "get_or_create_user_by_email", boom)

        response = google_client.get(
            CALLBACK, params={"code": "auth-code", "state": "state-123"}, follow_redirects=False
        )

        assert response.headers["location"] == "/?authError=google_auth_failed"
        assert SESSION_COOKIE_NAME not in set_cookie_headers(response)
        _assert_oauth_cookies_cleared(response)

    @respx.mock
    def test_session_creation_failure(
        self, google_client: TestClient, db_session: Session, monkeypatch
    ):
        _mock_google("sessionless@example.com")
        _with_oauth_session(google_client)

        def boom(*args, **kwargs):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(sessions_service, "create_session", boom)

        response = google_client.get(
            CALLBACK, params={"code": "auth-code", "state": "state-123"}, follow_redirects=False
        )

        assert response.headers["location"] == "/?authError=google_auth_failed"
        assert SESSION_COOKIE_NAME not in set_cookie_headers(response)
        assert db_session.scalar(select(func.count()).select_from(AuthSession)) == 0
        _assert_oauth_cookies_cleared(response)


def _on_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class TestCompleteGoogleLogin:
    CONFIG = GoogleOAuthConfig(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://testserver/auth/google/callback",
    )

    @pytest.mark.asyncio
    @respx.mock
    async def test_database_work_runs_off_event_loop(self, db_session: Session, monkeypatch):
        _mock_google("threaded@example.com")
        calls: dict[str, bool] = {}

        original_get_or_create = users_service.get_or_create_user_by_email
        original_create_session = sessions_service.create_session

        def get_or_create_spy(*args, **kwargs):
            calls["get_or_create_user_by_email"] = _on_event_loop()
            return original_get_or_create(*args, **kwargs)

        def create_session_spy(*args, **kwargs):
            calls["create_session"] = _on_event_loop()
            return original_create_session(*args, **kwargs)

        monkeypatch.setattr(users_service, "get_or_create_user_by_email", get_or_create_spy)
        monkeypatch.setattr(sessions_service, "create_session", create_session_spy)

        async with httpx.AsyncClient() as http_client:
            result = await complete_google_login(
                db_session,
                GoogleOAuthClient(http_client, self.CONFIG),
                code="auth-code",
                state="state-123",
                error=None,
                stored_state="state-123",
                stored_verifier="verifier-abc",
            )

        assert result.user.email == "threaded@example.com"
        assert calls == {"get_or_create_user_by_email": False, "create_session": False}
