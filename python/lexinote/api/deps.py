"""FastAPI dependencies for route handlers.

Common dependencies like database sessions, settings and the shared
outbound HTTP resources created in the app lifespan.
"""

import httpx
from fastapi import Request

from lexinote.config import get_settings
from lexinote.db.session import get_db, get_session_factory
from lexinote.services.translation import TranslationRouter

__all__ = [
    "get_db",
    "get_http_client",
    "get_session_factory",
    "get_settings",
    "get_translation_router",
]


def get_translation_router(request: Request) -> TranslationRouter:
    """Get the shared translation router from app state.

    The router wraps the httpx.AsyncClient created at startup.
    """
    return request.app.state.translation_router


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.httpx_client
