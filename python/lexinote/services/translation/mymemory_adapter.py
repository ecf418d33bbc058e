"""MyMemory translation adapter.

GET https://api.mymemory.translated.net/get?q=<text>&langpair=<src>|<tgt>

Response:
{
  "responseStatus": 200,
  "responseDetails": "",
  "responseData": {"translatedText": "..."}
}

A responseStatus other than 200 is a failure even on an HTTP 200 reply;
responseDetails is surfaced as the message when present.
"""

from lexinote.services.translation.adapter import TranslationAdapter
from lexinote.services.translation.errors import TranslationErrorClass
from lexinote.services.translation.types import TranslationProvider, TranslationRequest

MYMEMORY_URL = "https://api.mymemory.translated.net/get"


class MyMemoryAdapter(TranslationAdapter):
    provider = TranslationProvider.MYMEMORY
    label = "MyMemory"
    display_name = "MyMemory"
    usage_limit = "Free 500/day"

    async def translate(self, req: TranslationRequest) -> str:
        params = {"q": req.text, "langpair": f"{req.source_lang}|{req.target_lang}"}
        response = await self._client.get(MYMEMORY_URL, params=params)
        self._check_status(response)

        data = self._parse_json(response)
        if not isinstance(data, dict):
            raise self._invalid_response()

        # Status arrives as either an int or a string depending on the error path
        if str(data.get("responseStatus")) != "200":
            raise self._error(
                TranslationErrorClass.PROVIDER_ERROR,
                data.get("responseDetails") or "Translation failed",
            )

        response_data = data.get("responseData")
        translated = response_data.get("translatedText") if isinstance(response_data, dict) else None
        if not isinstance(translated, str):
            raise self._invalid_response()
        return translated
