"""Translation error normalization.

Every adapter failure reaches callers as a single ``TranslationError``.
Its ``error_class`` values are ``ApiErrorCode`` names, so the HTTP layer maps
them by value without inspecting messages.
"""

from enum import Enum


class TranslationErrorClass(str, Enum):
    """Normalized translation failure classifications."""

    PROVIDER_ERROR = "E_TRANSLATION_FAILED"
    INVALID_RESPONSE = "E_TRANSLATION_INVALID_RESPONSE"
    PROVIDER_DOWN = "E_TRANSLATION_PROVIDER_DOWN"
    TIMEOUT = "E_TRANSLATION_TIMEOUT"
    NOT_CONFIGURED = "E_PROVIDER_NOT_CONFIGURED"
    UNKNOWN_PROVIDER = "E_UNKNOWN_PROVIDER"


class TranslationError(Exception):
    """Exception for translation failures.

    Attributes:
        error_class: The normalized error classification
        message: Human-readable error message, surfaced to the caller
        provider: The provider that failed (if known)
    """

    def __init__(
        self,
        error_class: TranslationErrorClass,
        message: str,
        provider: str | None = None,
    ):
        self.error_class = error_class
        self.message = message
        self.provider = provider
        super().__init__(message)
