"""Gemini generateContent adapter.

POST https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent

Auth:
- Header: x-goog-api-key: <key>
- NEVER put key in query param

Request body:
{
  "systemInstruction": {"parts": [{"text": "<translator prompt>"}]},
  "contents": [{"role": "user", "parts": [{"text": "Translate from en to es: ..."}]}],
  "generationConfig": {"temperature": 0.3}
}

Response:
- text = concatenate candidates[0].content.parts[].text, whitespace-trimmed
"""

from typing import Any

from lexinote.services.translation.adapter import ChatCompletionAdapter
from lexinote.services.translation.prompt import (
    TRANSLATION_TEMPERATURE,
    render_translation_prompt,
)
from lexinote.services.translation.types import TranslationProvider, TranslationRequest

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash-lite"


class GeminiAdapter(ChatCompletionAdapter):
    provider = TranslationProvider.GEMINI
    label = "Gemini"
    display_name = "Gemini (LLM)"

    def build_url(self) -> str:
        return f"{GEMINI_BASE_URL}/{self._model}:generateContent"

    def _build_request_body(self, req: TranslationRequest) -> dict:
        body: dict = {"contents": [], "generationConfig": {"temperature": TRANSLATION_TEMPERATURE}}
        for turn in render_translation_prompt(req):
            if turn.role == "system":
                body["systemInstruction"] = {"parts": [{"text": turn.content}]}
            else:
                body["contents"].append({"role": "user", "parts": [{"text": turn.content}]})
        return body

    async def translate(self, req: TranslationRequest) -> str:
        api_key = self._require_api_key()
        headers = {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json",
        }

        response = await self._client.post(
            self.build_url(), headers=headers, json=self._build_request_body(req)
        )
        self._check_status(response)
        return self._parse_response(self._parse_json(response))

    def _parse_response(self, data: Any) -> str:
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise self._invalid_response() from e

        text = "".join(
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        )
        if not text:
            raise self._invalid_response()
        return text.strip()
