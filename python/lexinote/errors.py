"""API error definitions.

All API errors are defined here with their corresponding HTTP status codes.
Callers branch on ``ApiError.code``, never on message text.
"""

from enum import Enum


class ApiErrorCode(str, Enum):
    """Standardized error codes for the API.

    Format: E_CATEGORY_NAME
    """

    # Authentication errors (401)
    E_UNAUTHENTICATED = "E_UNAUTHENTICATED"
    E_INVALID_CREDENTIALS = "E_INVALID_CREDENTIALS"

    # Authorization errors (403)
    E_FORBIDDEN = "E_FORBIDDEN"

    # Not found errors (404)
    E_NOT_FOUND = "E_NOT_FOUND"
    E_NOTE_NOT_FOUND = "E_NOTE_NOT_FOUND"

    # Conflict errors (409)
    E_EMAIL_TAKEN = "E_EMAIL_TAKEN"

    # Validation errors (400)
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_UNKNOWN_PROVIDER = "E_UNKNOWN_PROVIDER"

    # Upstream errors (502/504)
    E_UPSTREAM = "E_UPSTREAM"
    E_TRANSLATION_FAILED = "E_TRANSLATION_FAILED"
    E_TRANSLATION_INVALID_RESPONSE = "E_TRANSLATION_INVALID_RESPONSE"
    E_TRANSLATION_PROVIDER_DOWN = "E_TRANSLATION_PROVIDER_DOWN"
    E_TRANSLATION_TIMEOUT = "E_TRANSLATION_TIMEOUT"

    # Configuration errors (503)
    E_OAUTH_NOT_CONFIGURED = "E_OAUTH_NOT_CONFIGURED"
    E_PROVIDER_NOT_CONFIGURED = "E_PROVIDER_NOT_CONFIGURED"

    # Server errors
    E_INTERNAL = "E_INTERNAL"  # 500


# Error code to HTTP status mapping
ERROR_CODE_TO_STATUS: dict[ApiErrorCode, int] = {
    ApiErrorCode.E_UNAUTHENTICATED: 401,
    ApiErrorCode.E_INVALID_CREDENTIALS: 401,
    ApiErrorCode.E_FORBIDDEN: 403,
    ApiErrorCode.E_NOT_FOUND: 404,
    ApiErrorCode.E_NOTE_NOT_FOUND: 404,
    ApiErrorCode.E_EMAIL_TAKEN: 409,
    ApiErrorCode.E_INVALID_REQUEST: 400,
    ApiErrorCode.E_UNKNOWN_PROVIDER: 400,
    ApiErrorCode.E_UPSTREAM: 502,
    ApiErrorCode.E_TRANSLATION_FAILED: 502,
    ApiErrorCode.E_TRANSLATION_INVALID_RESPONSE: 502,
    ApiErrorCode.E_TRANSLATION_PROVIDER_DOWN: 502,
    ApiErrorCode.E_TRANSLATION_TIMEOUT: 504,
    ApiErrorCode.E_OAUTH_NOT_CONFIGURED: 503,
    ApiErrorCode.E_PROVIDER_NOT_CONFIGURED: 503,
    ApiErrorCode.E_INTERNAL: 500,
}


class ApiError(Exception):
    """Base exception for API errors.

    Attributes:
        code: The error code enum value
        message: Human-readable error message
        status_code: HTTP status code (derived from code)
    """

    def __init__(self, code: ApiErrorCode, message: str):
        self.code = code
        self.message = message
        self.status_code = ERROR_CODE_TO_STATUS.get(code, 500)
        super().__init__(message)


class NotFoundError(ApiError):
    """Resource not found error."""

    def __init__(self, code: ApiErrorCode = ApiErrorCode.E_NOT_FOUND, message: str = "Not found"):
        super().__init__(code, message)


class ConflictError(ApiError):
    """Uniqueness conflict error."""

    def __init__(self, code: ApiErrorCode = ApiErrorCode.E_EMAIL_TAKEN, message: str = "Conflict"):
        super().__init__(code, message)


class UnauthenticatedError(ApiError):
    """Missing, invalid or expired credentials."""

    def __init__(
        self,
        code: ApiErrorCode = ApiErrorCode.E_UNAUTHENTICATED,
        message: str = "Authentication required",
    ):
        super().__init__(code, message)


class UpstreamError(ApiError):
    """A third-party service (OAuth or translation provider) failed."""

    def __init__(self, code: ApiErrorCode = ApiErrorCode.E_UPSTREAM, message: str = "Upstream error"):
        super().__init__(code, message)


class ConfigurationError(ApiError):
    """A required secret or environment value is missing."""

    def __init__(
        self,
        code: ApiErrorCode = ApiErrorCode.E_OAUTH_NOT_CONFIGURED,
        message: str = "Service not configured",
    ):
        super().__init__(code, message)
