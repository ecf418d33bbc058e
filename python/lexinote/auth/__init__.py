"""Authentication module.

This module provides:
- Password hashing (bcrypt)
- Google OAuth 2.0 + PKCE client
- Cookie helpers
- Session-cookie auth middleware with viewer identity on request state
"""

from lexinote.auth.middleware import AuthMiddleware, Viewer, get_optional_viewer, get_viewer

__all__ = [
    "AuthMiddleware",
    "Viewer",
    "get_optional_viewer",
    "get_viewer",
]
