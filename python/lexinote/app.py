"""FastAPI application creation and configuration.

This module creates and configures the FastAPI application instance.
It registers exception handlers, auth middleware, request-id middleware, and routes.

Middleware Ordering (Critical):
- Middleware runs in reverse order of registration
- RequestIDMiddleware is added LAST so it runs FIRST (outermost)
- This ensures all requests (including auth failures) get X-Request-ID

Actual execution order per request:
1. RequestIDMiddleware (sets request_id, starts timer)
2. AuthMiddleware (resolves session cookie, sets viewer)
3. Route handler
4. AuthMiddleware (returns response)
5. RequestIDMiddleware (logs, sets response header)

Outbound HTTP Lifecycle:
- httpx.AsyncClient is created at startup with HTTP_TIMEOUT_S, stored in app.state
- TranslationRouter and the Google OAuth client share it for connection pooling
- Client is closed gracefully at shutdown
"""

import json
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from lexinote.api.routes import create_api_router
from lexinote.auth.middleware import AuthMiddleware
from lexinote.config import get_settings
from lexinote.db.session import get_session_factory
from lexinote.errors import ApiError, ApiErrorCode
from lexinote.logging import configure_logging, get_logger
from lexinote.middleware.request_id import RequestIDMiddleware
from lexinote.responses import (
    api_error_handler,
    error_response,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from lexinote.services.sessions import create_session_resolver
from lexinote.services.translation import TranslationRouter

# Configure structured logging at import time
configure_logging()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle resources.

    - Creates shared httpx.AsyncClient for connection pooling
    - Initializes TranslationRouter with the configured provider keys
    - Cleans up on shutdown
    """
    settings = get_settings()

    app.state.httpx_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_s, connect=10.0),
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
    )
    app.state.translation_router = TranslationRouter.from_settings(
        app.state.httpx_client, settings
    )

    logger.info(
        "translation_router_initialized",
        available_providers=[
            p.id for p in app.state.translation_router.list_providers() if p.available
        ],
        google_oauth_configured=settings.google_oauth_configured,
    )

    yield

    await app.state.httpx_client.aclose()
    logger.info("httpx_client_closed")


def create_app(
    skip_auth_middleware: bool = False,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        skip_auth_middleware: If True, skip adding auth middleware (for testing).
        session_factory: Session factory for the auth middleware's session lookups.
            Defaults to the application database.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Lexinote API",
        description="Backend API for Lexinote - a translation notebook",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Register exception handlers
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Handle JSON decode errors from malformed JSON bodies
    @app.middleware("http")
    async def catch_json_decode_errors(request: Request, call_next):
        """Catch JSON decode errors before they reach route handlers."""
        if request.method in ("POST", "PUT", "PATCH"):
            content_type = request.headers.get("content-type", "")
            if "application/json" in content_type:
                body = await request.body()
                if body:
                    try:
                        json.loads(body)
                    except json.JSONDecodeError:
                        return JSONResponse(
                            status_code=400,
                            content=error_response(
                                ApiErrorCode.E_INVALID_REQUEST, "Malformed JSON body"
                            ),
                        )
        return await call_next(request)

    app.include_router(create_api_router())

    # Add auth middleware (runs on all requests except public paths)
    if not skip_auth_middleware:
        if session_factory is None:
            session_factory = get_session_factory()
        app.add_middleware(
            AuthMiddleware,
            session_resolver=create_session_resolver(session_factory),
        )
        logger.info("auth_middleware_enabled", env=settings.lexinote_env.value)

    return app


def add_request_id_middleware(app: FastAPI, log_requests: bool = True) -> None:
    """Add request-id middleware to the app.

    This should be called AFTER all other middleware is added, so it runs FIRST.
    This ensures every response includes X-Request-ID, including auth failures.

    Args:
        app: The FastAPI application.
        log_requests: Whether to log access entries for each request.
    """
    app.add_middleware(RequestIDMiddleware, log_requests=log_requests)
    logger.info("request_id_middleware_enabled")
