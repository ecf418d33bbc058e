"""Supported language catalogue.

Language codes are not validated against this map when translating; it only
drives the selectors a client renders.
"""

SUPPORTED_LANGUAGES: dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "ar": "Arabic",
    "hi": "Hindi",
}


def language_name(code: str) -> str:
    """Display name for ``code``, falling back to the code itself."""
    return SUPPORTED_LANGUAGES.get(code, code)
