"""Public Google Translate endpoint adapter.

GET https://translate.googleapis.com/translate_a/single
    ?client=gtx&sl=<src>&tl=<tgt>&dt=t&q=<text>

Response is a nested array. Long inputs come back in several segments:
[
  [["Hola ", "Hello ", ...], ["mundo", "world", ...]],
  null,
  "en",
  ...
]

The translation is the concatenation of item[0] for every item in data[0]
whose first element is a string. No segments means an invalid response.
"""

from typing import Any

from lexinote.services.translation.adapter import TranslationAdapter
from lexinote.services.translation.types import TranslationProvider, TranslationRequest

GOOGLE_TRANSLATE_URL = "https://translate.googleapis.com/translate_a/single"


class GoogleTranslateAdapter(TranslationAdapter):
    provider = TranslationProvider.GOOGLE_TRANSLATE
    label = "Google Translate"
    display_name = "Google Translate"

    async def translate(self, req: TranslationRequest) -> str:
        params = {
            "client": "gtx",
            "sl": req.source_lang,
            "tl": req.target_lang,
            "dt": "t",
            "q": req.text,
        }
        response = await self._client.get(GOOGLE_TRANSLATE_URL, params=params)
        self._check_status(response)
        return self._parse_segments(self._parse_json(response))

    def _parse_segments(self, data: Any) -> str:
        if not isinstance(data, list) or not data or not isinstance(data[0], list):
            raise self._invalid_response()

        segments = [
            item[0]
            for item in data[0]
            if isinstance(item, list) and item and isinstance(item[0], str)
        ]
        if not segments:
            raise self._invalid_response()
        return "".join(segments)
