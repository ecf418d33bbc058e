"""Authentication middleware for FastAPI.

Provides:
- AuthMiddleware: Global middleware resolving the session cookie to a viewer
- get_viewer: Dependency for accessing the authenticated viewer
- get_optional_viewer: Same, but None when signed out

Path classes:
- PUBLIC_PATHS: never touch the session store
- /auth/*: viewer resolved when a cookie is present, never rejected here
- everything else: 401 E_UNAUTHENTICATED without a live session
"""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from lexinote.auth.cookies import SESSION_COOKIE_NAME
from lexinote.errors import ApiError, ApiErrorCode
from lexinote.logging import get_logger
from lexinote.responses import error_response
from lexinote.schemas.auth import SessionWithUser

logger = get_logger(__name__)

# Paths that don't require authentication
PUBLIC_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# Paths where a viewer is optional
OPTIONAL_AUTH_PREFIXES = ("/auth/",)

SessionResolver = Callable[[str], SessionWithUser | None]


@dataclass
class Viewer:
    """Authenticated viewer identity.

    Attributes:
        user_id: The viewer's user ID.
        email: The viewer's email.
        session_id: The session the request was authenticated with.
    """

    user_id: UUID
    email: str
    session_id: UUID


class AuthMiddleware(BaseHTTPMiddleware):
    """Session-cookie authentication middleware.

    Order of checks:
    1. Skip if public path
    2. Read the session cookie
    3. Resolve it to a session + user via the resolver callback
    4. Attach Viewer to request state
    5. Reject protected paths without a viewer
    """

    def __init__(self, app: ASGIApp, session_resolver: SessionResolver):
        """Initialize the auth middleware.

        Args:
            app: The ASGI application.
            session_resolver: Function(token) -> SessionWithUser | None.
                              Runs in the threadpool with its own DB session.
        """
        super().__init__(app)
        self.session_resolver = session_resolver

    async def dispatch(self, request: Request, call_next) -> JSONResponse:
        """Process the request through auth checks."""
        path = request.url.path
        if path in PUBLIC_PATHS:
            return await call_next(request)

        token = request.cookies.get(SESSION_COOKIE_NAME)
        viewer = None

        if token:
            try:
                resolved = await run_in_threadpool(self.session_resolver, token)
            except Exception:
                logger.exception("session_lookup_failed", request_path=path)
                return self._error_json_response(
                    ApiErrorCode.E_INTERNAL, "Internal server error", 500
                )
            if resolved is not None:
                viewer = Viewer(
                    user_id=resolved.user.id,
                    email=resolved.user.email,
                    session_id=resolved.session.id,
                )
                request.state.viewer = viewer

        if viewer is None and not path.startswith(OPTIONAL_AUTH_PREFIXES):
            logger.warning(
                "auth_failure",
                reason="invalid_session" if token else "missing_session",
                request_path=path,
            )
            return self._error_json_response(
                ApiErrorCode.E_UNAUTHENTICATED, "Authentication required", 401
            )

        return await call_next(request)

    def _error_json_response(
        self, code: ApiErrorCode, message: str, status_code: int
    ) -> JSONResponse:
        """Create a JSON error response."""
        return JSONResponse(
            status_code=status_code,
            content=error_response(code, message),
        )


def get_optional_viewer(request: Request) -> Viewer | None:
    return getattr(request.state, "viewer", None)


def get_viewer(request: Request) -> Viewer:
    """FastAPI dependency to get the authenticated viewer.

    Raises:
        ApiError: E_UNAUTHENTICATED if no session was resolved for this request.
    """
    viewer = get_optional_viewer(request)
    if viewer is None:
        raise ApiError(ApiErrorCode.E_UNAUTHENTICATED, "Authentication required")
    return viewer
