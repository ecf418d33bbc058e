"""Middleware modules for the Lexinote API."""

from lexinote.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware

__all__ = ["RequestIDMiddleware", "REQUEST_ID_HEADER"]
