"""Abstract base classes for translation adapters.

Rules:
- Async, over the shared httpx.AsyncClient
- No retries, no fallback to another provider
- No DB access
- No logging of request/response bodies
- Shape problems raise TranslationError; transport errors bubble up to the router
"""

from abc import ABC, abstractmethod
from typing import Any

import httpx

from lexinote.services.translation.errors import TranslationError, TranslationErrorClass
from lexinote.services.translation.types import TranslationProvider, TranslationRequest


class TranslationAdapter(ABC):
    """Base class for a single translation backend.

    Class attributes:
        provider: Discriminant this adapter serves.
        label: Short name used in error messages.
        display_name: Name shown in the provider catalogue.
        usage_limit: Upstream usage limit shown in the provider catalogue.
    """

    provider: TranslationProvider
    label: str
    display_name: str
    usage_limit: str = "Free"

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @property
    def is_configured(self) -> bool:
        """Whether the adapter can be called at all."""
        return True

    @abstractmethod
    async def translate(self, req: TranslationRequest) -> str:
        """Translate ``req.text`` and return the translated text.

        Raises:
            TranslationError: On a non-2xx reply or an unexpected response shape.
            httpx.TimeoutException: On request timeout.
            httpx.TransportError: On network failure.
        """

    def _error(self, error_class: TranslationErrorClass, message: str) -> TranslationError:
        return TranslationError(error_class, message, provider=self.provider.value)

    def _invalid_response(self) -> TranslationError:
        return self._error(
            TranslationErrorClass.INVALID_RESPONSE, f"Invalid response from {self.label}"
        )

    def _check_status(self, response: httpx.Response) -> None:
        if response.is_error:
            raise self._error(
                TranslationErrorClass.PROVIDER_ERROR,
                f"{self.label} API error: {response.reason_phrase or response.status_code}",
            )

    def _parse_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise self._invalid_response() from e


class ChatCompletionAdapter(TranslationAdapter):
    """Base for LLM-backed providers that need a server-held API key."""

    usage_limit = "API Key"

    def __init__(self, client: httpx.AsyncClient, *, api_key: str | None, model: str):
        super().__init__(client)
        self._api_key = api_key
        self._model = model

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _require_api_key(self) -> str:
        """Return the API key or fail before any network call is made."""
        if not self._api_key:
            raise self._error(
                TranslationErrorClass.NOT_CONFIGURED, f"{self.label} API key not configured"
            )
        return self._api_key
