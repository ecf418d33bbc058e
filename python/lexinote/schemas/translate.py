"""Translation request/response schemas."""

from pydantic import BaseModel, Field

from lexinote.services.translation.types import TranslationProvider


class TranslateRequest(BaseModel):
    """Request schema for a one-off translation.

    ``provider`` defaults to the public Google Translate endpoint.
    """

    text: str = Field(..., min_length=1)
    source_lang: str = Field(..., min_length=1)
    target_lang: str = Field(..., min_length=1)
    provider: TranslationProvider | None = None


class TranslateOut(BaseModel):
    translated_text: str
    provider: TranslationProvider
    detected_source_lang: str | None = None


class ProviderOut(BaseModel):
    """Provider catalogue entry."""

    id: str
    name: str
    limit: str
    available: bool


class LanguageOut(BaseModel):
    code: str
    name: str
