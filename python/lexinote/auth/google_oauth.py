"""Google OAuth 2.0 authorization-code flow with PKCE.

Endpoints:
- Authorization: https://accounts.google.com/o/oauth2/v2/auth
- Token: POST https://oauth2.googleapis.com/token (form-encoded)
- Userinfo: GET https://openidconnect.googleapis.com/v1/userinfo (Bearer)

State and verifier are random, base64url without padding:
- state: 16 random bytes
- code_verifier: 32 random bytes (43 characters)
- code_challenge: base64url(SHA-256(code_verifier)), method S256

Authorization codes, access tokens and the client secret are never logged.
"""

import base64
import hashlib
import secrets
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from lexinote.config import Settings
from lexinote.errors import ApiErrorCode, ConfigurationError, UpstreamError
from lexinote.logging import get_logger

logger = get_logger(__name__)

GOOGLE_AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
GOOGLE_SCOPES = "openid email profile"

STATE_BYTES = 16
CODE_VERIFIER_BYTES = 32


@dataclass(frozen=True)
class GoogleOAuthConfig:
    """Registered OAuth client credentials."""

    client_id: str
    client_secret: str
    redirect_uri: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "GoogleOAuthConfig":
        """Build config from settings.

        Raises:
            ConfigurationError: E_OAUTH_NOT_CONFIGURED if any credential is missing.
        """
        if not settings.google_oauth_configured:
            raise ConfigurationError(
                ApiErrorCode.E_OAUTH_NOT_CONFIGURED, "Google sign-in is not configured"
            )
        return cls(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_uri=settings.google_redirect_uri,
        )


@dataclass(frozen=True)
class OAuthStart:
    """Everything needed to redirect the browser to Google."""

    authorization_url: str
    state: str
    code_verifier: str


@dataclass(frozen=True)
class GoogleTokens:
    access_token: str
    id_token: str | None = None
    expires_in: int | None = None
    token_type: str | None = None


@dataclass(frozen=True)
class GoogleUserInfo:
    """Subset of the OpenID Connect userinfo claims."""

    sub: str | None
    email: str | None
    email_verified: bool | None = None
    name: str | None = None
    picture: str | None = None


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def generate_oauth_state() -> str:
    return _b64url(secrets.token_bytes(STATE_BYTES))


def generate_code_verifier() -> str:
    return _b64url(secrets.token_bytes(CODE_VERIFIER_BYTES))


def derive_code_challenge(code_verifier: str) -> str:
    """S256 PKCE challenge for a verifier."""
    return _b64url(hashlib.sha256(code_verifier.encode("ascii")).digest())


def build_authorization_url(config: GoogleOAuthConfig, state: str, code_challenge: str) -> str:
    params = {
        "client_id": config.client_id,
        "redirect_uri": config.redirect_uri,
        "response_type": "code",
        "scope": GOOGLE_SCOPES,
        "state": state,
        "code_challenge": code_challenge,
        "code_challenge_method": "S256",
        "access_type": "offline",
        "prompt": "consent",
    }
    return f"{GOOGLE_AUTHORIZATION_URL}?{urlencode(params)}"


def start_google_auth(config: GoogleOAuthConfig) -> OAuthStart:
    """Generate fresh state + verifier and the matching authorization URL."""
    state = generate_oauth_state()
    code_verifier = generate_code_verifier()
    return OAuthStart(
        authorization_url=build_authorization_url(
            config, state, derive_code_challenge(code_verifier)
        ),
        state=state,
        code_verifier=code_verifier,
    )


class GoogleOAuthClient:
    """Talks to Google's token and userinfo endpoints over the shared client."""

    def __init__(self, http_client: httpx.AsyncClient, config: GoogleOAuthConfig):
        self._client = http_client
        self._config = config

    async def exchange_code(self, code: str, code_verifier: str) -> GoogleTokens:
        """Exchange an authorization code for tokens.

        Raises:
            UpstreamError: On a non-2xx reply or a reply without an access token.
        """
        response = await self._client.post(
            GOOGLE_TOKEN_URL,
            data={
                "client_id": self._config.client_id,
                "client_secret": self._config.client_secret,
                "redirect_uri": self._config.redirect_uri,
                "grant_type": "authorization_code",
                "code": code,
                "code_verifier": code_verifier,
            },
        )
        if response.is_error:
            logger.warning("google_token_exchange_failed", status_code=response.status_code)
            raise UpstreamError(ApiErrorCode.E_UPSTREAM, "Google token exchange failed")

        data = self._parse_json(response)
        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise UpstreamError(ApiErrorCode.E_UPSTREAM, "Google token response missing access_token")

        return GoogleTokens(
            access_token=access_token,
            id_token=data.get("id_token"),
            expires_in=data.get("expires_in"),
            token_type=data.get("token_type"),
        )

    async def fetch_userinfo(self, access_token: str) -> GoogleUserInfo:
        """Fetch the signed-in user's profile.

        Raises:
            UpstreamError: On a non-2xx reply.
        """
        response = await self._client.get(
            GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.is_error:
            logger.warning("google_userinfo_failed", status_code=response.status_code)
            raise UpstreamError(ApiErrorCode.E_UPSTREAM, "Google userinfo request failed")

        data = self._parse_json(response)
        return GoogleUserInfo(
            sub=data.get("sub"),
            email=data.get("email"),
            email_verified=data.get("email_verified"),
            name=data.get("name"),
            picture=data.get("picture"),
        )

    @staticmethod
    def _parse_json(response: httpx.Response) -> dict:
        try:
            data = response.json()
        except ValueError:
            raise UpstreamError(ApiErrorCode.E_UPSTREAM, "Invalid response from Google") from None
        if not isinstance(data, dict):
            raise UpstreamError(ApiErrorCode.E_UPSTREAM, "Invalid response from Google")
        return data
