"""Translation provider layer.

Five interchangeable backends behind one router:
- googletranslate: public Google Translate endpoint (default)
- deepseek: DeepSeek chat completions (needs DEEPSEEK_API_KEY)
- gemini: Gemini generateContent (needs GEMINI_API_KEY)
- mymemory: MyMemory public API
- lingva: Lingva Translate instance
"""

from lexinote.services.translation.errors import TranslationError, TranslationErrorClass
from lexinote.services.translation.languages import SUPPORTED_LANGUAGES, language_name
from lexinote.services.translation.router import TranslationRouter
from lexinote.services.translation.types import (
    DEFAULT_PROVIDER,
    ProviderInfo,
    TranslationProvider,
    TranslationRequest,
    TranslationResult,
)

__all__ = [
    "DEFAULT_PROVIDER",
    "SUPPORTED_LANGUAGES",
    "ProviderInfo",
    "TranslationError",
    "TranslationErrorClass",
    "TranslationProvider",
    "TranslationRequest",
    "TranslationResult",
    "TranslationRouter",
    "language_name",
]
