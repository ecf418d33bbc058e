"""Provider-agnostic prompt rendering for the LLM-backed translators.

Produces a list of Turn objects; each adapter converts them to its own
wire format.

System prompt (fixed):
    You are a professional translator. Translate the given text accurately
    and naturally. Only return the translation, no explanations.

User turn:
    Translate from {Source} to {Target}: {text}

Language codes are rendered as names from SUPPORTED_LANGUAGES; unknown codes
pass through unchanged.
"""

from lexinote.services.translation.languages import language_name
from lexinote.services.translation.types import TranslationRequest, Turn

TRANSLATOR_SYSTEM_PROMPT = (
    "You are a professional translator. Translate the given text accurately and naturally. "
    "Only return the translation, no explanations."
)

TRANSLATION_TEMPERATURE = 0.3


def render_translation_prompt(
    req: TranslationRequest,
    system_prompt: str = TRANSLATOR_SYSTEM_PROMPT,
) -> list[Turn]:
    """Build the system + user turns for a translation request."""
    source = language_name(req.source_lang)
    target = language_name(req.target_lang)
    return [
        Turn(role="system", content=system_prompt),
        Turn(role="user", content=f"Translate from {source} to {target}: {req.text}"),
    ]
