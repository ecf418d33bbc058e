"""Translation routes.

Routes are transport-only: each calls exactly one router/service function.

- POST /translate: translate text through one provider
- GET /translate/providers: provider catalogue with availability
- GET /translate/languages: supported language codes

All routes require authentication. Provider failures map by error class:
E_TRANSLATION_FAILED / E_TRANSLATION_INVALID_RESPONSE / E_TRANSLATION_PROVIDER_DOWN (502),
E_TRANSLATION_TIMEOUT (504), E_PROVIDER_NOT_CONFIGURED (503).
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from lexinote.api.deps import get_translation_router
from lexinote.auth.middleware import Viewer, get_viewer
from lexinote.errors import ApiError, ApiErrorCode
from lexinote.responses import success_response
from lexinote.schemas.translate import LanguageOut, ProviderOut, TranslateOut, TranslateRequest
from lexinote.services.translation import (
    DEFAULT_PROVIDER,
    SUPPORTED_LANGUAGES,
    TranslationError,
    TranslationRequest,
    TranslationRouter,
)

router = APIRouter(tags=["translate"])


@router.post("/translate")
async def translate(
    body: TranslateRequest,
    viewer: Annotated[Viewer, Depends(get_viewer)],
    translation_router: Annotated[TranslationRouter, Depends(get_translation_router)],
) -> dict:
    """Translate text.

    Returns:
        {"data": {"translated_text": ..., "provider": ..., "detected_source_lang": ...}}
    """
    req = TranslationRequest(
        text=body.text,
        source_lang=body.source_lang,
        target_lang=body.target_lang,
        provider=body.provider or DEFAULT_PROVIDER,
    )
    try:
        result = await translation_router.translate(req)
    except TranslationError as e:
        raise ApiError(ApiErrorCode(e.error_class.value), e.message) from e

    out = TranslateOut(
        translated_text=result.translated_text,
        provider=result.provider,
        detected_source_lang=result.detected_source_lang,
    )
    return success_response(out.model_dump(mode="json"))


@router.get("/translate/providers")
def list_providers(
    viewer: Annotated[Viewer, Depends(get_viewer)],
    translation_router: Annotated[TranslationRouter, Depends(get_translation_router)],
) -> dict:
    providers = [
        ProviderOut(id=p.id, name=p.name, limit=p.limit, available=p.available)
        for p in translation_router.list_providers()
    ]
    return success_response([p.model_dump(mode="json") for p in providers])


@router.get("/translate/languages")
def list_languages(viewer: Annotated[Viewer, Depends(get_viewer)]) -> dict:
    languages = [LanguageOut(code=code, name=name) for code, name in SUPPORTED_LANGUAGES.items()]
    return success_response([lang.model_dump(mode="json") for lang in languages])
