"""Shared type definitions for the translation adapter layer.

- TranslationProvider: discriminant selecting one of the five adapters
- Turn: provider-agnostic chat turn for the LLM-backed providers
- TranslationRequest / TranslationResult: router input and output
- ProviderInfo: catalogue entry shown to clients
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal


class TranslationProvider(str, Enum):
    """Available translation backends."""

    GOOGLE_TRANSLATE = "googletranslate"
    DEEPSEEK = "deepseek"
    GEMINI = "gemini"
    MYMEMORY = "mymemory"
    LINGVA = "lingva"


DEFAULT_PROVIDER = TranslationProvider.GOOGLE_TRANSLATE


@dataclass(frozen=True)
class Turn:
    """Provider-agnostic conversation turn.

    Attributes:
        role: One of "system" or "user"
        content: The text content of the turn
    """

    role: Literal["system", "user"]
    content: str


@dataclass(frozen=True)
class TranslationRequest:
    """Request to translate ``text`` between two language codes.

    Attributes:
        text: Source text, sent to the provider verbatim
        source_lang: Source language code (e.g. "en")
        target_lang: Target language code (e.g. "es")
        provider: Backend to use; defaults to the public Google endpoint
    """

    text: str
    source_lang: str
    target_lang: str
    provider: TranslationProvider = DEFAULT_PROVIDER


@dataclass(frozen=True)
class TranslationResult:
    """Normalized translation output, identical in shape for every provider.

    No provider is asked to detect the language; ``detected_source_lang``
    carries the source language the caller requested.
    """

    translated_text: str
    provider: TranslationProvider
    detected_source_lang: str | None = None


@dataclass(frozen=True)
class ProviderInfo:
    """Catalogue entry for a provider.

    Attributes:
        id: Provider discriminant value
        name: Display name
        limit: Human-readable usage limit of the upstream service
        available: False when the provider needs an API key that is not configured
    """

    id: str
    name: str
    limit: str
    available: bool
