"""API route definitions.

Uses a factory pattern to avoid import-time settings loading.
This allows tests to import modules without requiring all environment
variables to be configured upfront.
"""

from fastapi import APIRouter

from lexinote.api.routes.auth import router as auth_router
from lexinote.api.routes.health import router as health_router
from lexinote.api.routes.notes import router as notes_router
from lexinote.api.routes.translate import router as translate_router


def create_api_router() -> APIRouter:
    """Create and configure the API router.

    Returns:
        Configured APIRouter with all routes registered.
    """
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(auth_router)
    api_router.include_router(translate_router)
    api_router.include_router(notes_router)
    return api_router


__all__ = ["create_api_router"]
