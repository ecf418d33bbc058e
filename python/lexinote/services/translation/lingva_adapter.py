"""Lingva Translate adapter.

GET {base_url}/api/v1/{source}/{target}/{url-encoded text}

Response: {"translation": "..."}
"""

from urllib.parse import quote

import httpx

from lexinote.services.translation.adapter import TranslationAdapter
from lexinote.services.translation.types import TranslationProvider, TranslationRequest

DEFAULT_LINGVA_BASE_URL = "https://lingva.ml"


class LingvaAdapter(TranslationAdapter):
    provider = TranslationProvider.LINGVA
    label = "Lingva"
    display_name = "Lingva Translate"

    def __init__(self, client: httpx.AsyncClient, *, base_url: str = DEFAULT_LINGVA_BASE_URL):
        super().__init__(client)
        self._base_url = base_url.rstrip("/")

    def build_url(self, req: TranslationRequest) -> str:
        segments = (quote(part, safe="") for part in (req.source_lang, req.target_lang, req.text))
        return f"{self._base_url}/api/v1/" + "/".join(segments)

    async def translate(self, req: TranslationRequest) -> str:
        response = await self._client.get(self.build_url(req))
        self._check_status(response)

        data = self._parse_json(response)
        translated = data.get("translation") if isinstance(data, dict) else None
        if not isinstance(translated, str):
            raise self._invalid_response()
        return translated
