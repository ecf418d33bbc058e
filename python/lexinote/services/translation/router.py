"""Translation router for adapter selection and error normalization.

- Resolves the adapter for a provider discriminant
- Reports which providers are usable with the current keys
- Wraps adapter calls so every failure surfaces as one TranslationError
- Emits translation.request.started / finished / failed events

Error handling:
- TranslationError from the adapter → re-raised unchanged
- Timeout → E_TRANSLATION_TIMEOUT
- Network failure → E_TRANSLATION_PROVIDER_DOWN

Event fields carry sizes and language codes only, never the text itself.
"""

import time

import httpx

from lexinote.config import Settings
from lexinote.logging import get_logger
from lexinote.services.translation.adapter import TranslationAdapter
from lexinote.services.translation.deepseek_adapter import DEFAULT_DEEPSEEK_MODEL, DeepSeekAdapter
from lexinote.services.translation.errors import TranslationError, TranslationErrorClass
from lexinote.services.translation.gemini_adapter import DEFAULT_GEMINI_MODEL, GeminiAdapter
from lexinote.services.translation.google_translate_adapter import GoogleTranslateAdapter
from lexinote.services.translation.lingva_adapter import DEFAULT_LINGVA_BASE_URL, LingvaAdapter
from lexinote.services.translation.mymemory_adapter import MyMemoryAdapter
from lexinote.services.translation.types import (
    ProviderInfo,
    TranslationProvider,
    TranslationRequest,
    TranslationResult,
)

logger = get_logger(__name__)


class TranslationRouter:
    """Routes translation requests to provider adapters.

    The catalogue order is the adapter registration order.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        deepseek_api_key: str | None = None,
        gemini_api_key: str | None = None,
        deepseek_model: str = DEFAULT_DEEPSEEK_MODEL,
        gemini_model: str = DEFAULT_GEMINI_MODEL,
        lingva_base_url: str = DEFAULT_LINGVA_BASE_URL,
    ):
        """Initialize router with the shared HTTP client and provider keys.

        Args:
            client: Shared httpx.AsyncClient for connection pooling.
            deepseek_api_key: Server-held DeepSeek key; None disables the provider.
            gemini_api_key: Server-held Gemini key; None disables the provider.
            deepseek_model: DeepSeek model name.
            gemini_model: Gemini model name.
            lingva_base_url: Lingva instance to call.
        """
        self._client = client
        self._adapters: dict[TranslationProvider, TranslationAdapter] = {
            TranslationProvider.GOOGLE_TRANSLATE: GoogleTranslateAdapter(client),
            TranslationProvider.DEEPSEEK: DeepSeekAdapter(
                client, api_key=deepseek_api_key, model=deepseek_model
            ),
            TranslationProvider.GEMINI: GeminiAdapter(
                client, api_key=gemini_api_key, model=gemini_model
            ),
            TranslationProvider.MYMEMORY: MyMemoryAdapter(client),
            TranslationProvider.LINGVA: LingvaAdapter(client, base_url=lingva_base_url),
        }

    @classmethod
    def from_settings(cls, client: httpx.AsyncClient, settings: Settings) -> "TranslationRouter":
        return cls(
            client,
            deepseek_api_key=settings.deepseek_api_key,
            gemini_api_key=settings.gemini_api_key,
            deepseek_model=settings.deepseek_model,
            gemini_model=settings.gemini_model,
            lingva_base_url=settings.lingva_base_url,
        )

    def resolve_adapter(self, provider: str | TranslationProvider) -> TranslationAdapter:
        """Get the adapter for a provider.

        Raises:
            TranslationError: If the provider is unknown.
        """
        try:
            key = TranslationProvider(provider)
        except ValueError:
            raise TranslationError(
                TranslationErrorClass.UNKNOWN_PROVIDER,
                f"Unknown provider: {provider}",
                provider=str(provider),
            ) from None
        return self._adapters[key]

    def is_provider_available(self, provider: str) -> bool:
        """Check if a provider is known and has the keys it needs."""
        try:
            return self.resolve_adapter(provider).is_configured
        except TranslationError:
            return False

    def list_providers(self) -> list[ProviderInfo]:
        return [
            ProviderInfo(
                id=adapter.provider.value,
                name=adapter.display_name,
                limit=adapter.usage_limit,
                available=adapter.is_configured,
            )
            for adapter in self._adapters.values()
        ]

    async def translate(self, req: TranslationRequest) -> TranslationResult:
        """Translate through the requested provider with error normalization.

        Raises:
            TranslationError: With normalized error class on failure.
        """
        adapter = self.resolve_adapter(req.provider)
        base = {
            "provider": adapter.provider.value,
            "source_lang": req.source_lang,
            "target_lang": req.target_lang,
        }

        logger.info("translation.request.started", **base, text_chars=len(req.text))
        start = time.monotonic()

        try:
            translated = await adapter.translate(req)

        except TranslationError as e:
            self._log_failure(base, e.error_class, start)
            raise

        except httpx.TimeoutException as e:
            self._log_failure(base, TranslationErrorClass.TIMEOUT, start)
            raise TranslationError(
                TranslationErrorClass.TIMEOUT,
                f"{adapter.label} request timed out",
                provider=adapter.provider.value,
            ) from e

        except httpx.TransportError as e:
            self._log_failure(base, TranslationErrorClass.PROVIDER_DOWN, start)
            raise TranslationError(
                TranslationErrorClass.PROVIDER_DOWN,
                f"{adapter.label} is unreachable",
                provider=adapter.provider.value,
            ) from e

        logger.info(
            "translation.request.finished",
            **base,
            outcome="success",
            latency_ms=int((time.monotonic() - start) * 1000),
            translated_chars=len(translated),
        )
        return TranslationResult(
            translated_text=translated,
            provider=adapter.provider,
            detected_source_lang=req.source_lang,
        )

    @staticmethod
    def _log_failure(base: dict, error_class: TranslationErrorClass, start: float) -> None:
        logger.error(
            "translation.request.failed",
            **base,
            outcome="error",
            error_class=error_class.value,
            latency_ms=int((time.monotonic() - start) * 1000),
        )
