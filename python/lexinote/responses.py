"""Envelope builders and the exception handlers registered by ``create_app``.

Every JSON body the API returns is either ``{"data": ...}`` or
``{"error": {"code", "message", "request_id"}}``. The request id comes from
the logging context set by RequestIDMiddleware, so a client can quote it when
reporting a failed translation or login.
"""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lexinote.errors import ApiError, ApiErrorCode
from lexinote.logging import get_logger, get_request_id

logger = get_logger(__name__)

# Framework-raised statuses (unknown route, wrong method, router-level guards).
_HTTP_STATUS_CODES = {
    400: ApiErrorCode.E_INVALID_REQUEST,
    401: ApiErrorCode.E_UNAUTHENTICATED,
    403: ApiErrorCode.E_FORBIDDEN,
    404: ApiErrorCode.E_NOT_FOUND,
    405: ApiErrorCode.E_INVALID_REQUEST,
    422: ApiErrorCode.E_INVALID_REQUEST,
}


def success_response(data: Any) -> dict[str, Any]:
    return {"data": data}


def error_response(
    code: ApiErrorCode, message: str, request_id: str | None = None
) -> dict[str, Any]:
    """Error envelope; ``request_id`` defaults to the current request's id."""
    request_id = request_id or get_request_id()
    body: dict[str, Any] = {"code": code.value, "message": message}
    if request_id:
        body["request_id"] = request_id
    return {"error": body}


def _error_json(status_code: int, code: ApiErrorCode, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_response(code, message))


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _error_json(exc.status_code, exc.code, exc.message)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = _HTTP_STATUS_CODES.get(exc.status_code, ApiErrorCode.E_INTERNAL)
    return _error_json(exc.status_code, code, str(exc.detail or "An error occurred"))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Schema failures (bad email, short password, empty text) answer 400, not 422."""
    return _error_json(400, ApiErrorCode.E_INVALID_REQUEST, "Invalid request body")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback server-side; the client only sees E_INTERNAL."""
    logger.exception("unhandled_exception", error_type=type(exc).__name__)
    return _error_json(500, ApiErrorCode.E_INTERNAL, "Internal server error")
