"""X-Request-ID middleware for request correlation and access logging.

Middleware Ordering (Critical):
- Must be added LAST to run FIRST (Starlette middleware runs in reverse order)
- Session-auth failures then still carry X-Request-ID and a logged access line
"""

import re
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from lexinote.logging import clear_request_context, get_logger, set_request_context

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128

# Alphanumeric plus dots, hyphens, underscores
VALID_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,128}$")

UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)

logger = get_logger(__name__)


def is_valid_request_id(value: str) -> bool:
    """Check if an incoming request ID may be echoed back.

    Args:
        value: The raw header value.

    Returns:
        True if at most 128 bytes and either a UUID or a safe token.
    """
    if len(value.encode("utf-8")) > MAX_REQUEST_ID_LENGTH:
        return False
    return bool(UUID_PATTERN.match(value) or VALID_REQUEST_ID_PATTERN.match(value))


def normalize_request_id(value: str) -> str:
    """Lowercase UUIDs; leave other valid IDs untouched."""
    if UUID_PATTERN.match(value):
        return value.lower()
    return value


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to every request, log context and response.

    Args:
        app: The ASGI application.
        log_requests: If True, emit one ``request_completed`` entry per request.
    """

    def __init__(self, app, log_requests: bool = True):
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start_time = time.monotonic()

        incoming_id = request.headers.get(REQUEST_ID_HEADER)
        if incoming_id and is_valid_request_id(incoming_id):
            request_id = normalize_request_id(incoming_id)
        else:
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id
        set_request_context(request_id, path=request.url.path, method=request.method)

        try:
            response = await call_next(request)

            # Set by the session auth middleware when a valid cookie was presented
            viewer = getattr(request.state, "viewer", None)
            if viewer is not None:
                set_request_context(request_id, user_id=str(viewer.user_id))

            response.headers[REQUEST_ID_HEADER] = request_id

            if self.log_requests:
                duration_ms = (time.monotonic() - start_time) * 1000
                logger.info(
                    "request_completed",
                    status_code=response.status_code,
                    duration_ms=round(duration_ms, 2),
                )

            return response

        except Exception:
            logger.exception("request_failed")
            raise

        finally:
            clear_request_context()
