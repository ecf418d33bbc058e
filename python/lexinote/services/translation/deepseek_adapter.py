"""DeepSeek chat-completions adapter.

POST https://api.deepseek.com/v1/chat/completions

Auth:
- Header: Authorization: Bearer <key>

Request body (OpenAI-compatible):
{
  "model": "deepseek-chat",
  "messages": [
    {"role": "system", "content": "<translator prompt>"},
    {"role": "user", "content": "Translate from en to es: ..."}
  ],
  "temperature": 0.3
}

Response:
- text = choices[0].message.content, whitespace-trimmed
"""

from typing import Any

from lexinote.services.translation.adapter import ChatCompletionAdapter
from lexinote.services.translation.prompt import (
    TRANSLATION_TEMPERATURE,
    render_translation_prompt,
)
from lexinote.services.translation.types import TranslationProvider, TranslationRequest

DEEPSEEK_CHAT_URL = "https://api.deepseek.com/v1/chat/completions"
DEFAULT_DEEPSEEK_MODEL = "deepseek-chat"


class DeepSeekAdapter(ChatCompletionAdapter):
    provider = TranslationProvider.DEEPSEEK
    label = "DeepSeek"
    display_name = "DeepSeek (LLM)"

    async def translate(self, req: TranslationRequest) -> str:
        api_key = self._require_api_key()
        body = {
            "model": self._model,
            "messages": [
                {"role": turn.role, "content": turn.content}
                for turn in render_translation_prompt(req)
            ],
            "temperature": TRANSLATION_TEMPERATURE,
        }
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

        response = await self._client.post(DEEPSEEK_CHAT_URL, headers=headers, json=body)
        self._check_status(response)
        return self._parse_response(self._parse_json(response))

    def _parse_response(self, data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise self._invalid_response() from e
        if not isinstance(content, str):
            raise self._invalid_response()
        return content.strip()
