"""OpenAI chat-completions provider (GPT-3.5, GPT-4 family)."""

from __future__ import annotations

from ..models.provider import AiCompletionOptions, AiCompletionResponse
from .base import BaseProvider


class OpenAiProvider(BaseProvider):
    name = "openai"
    label = "OpenAI"
    default_model = "gpt-3.5-turbo"
    API_URL = "https://api.openai.com/v1/chat/completions"

    def build_request(self, options: AiCompletionOptions) -> dict:
        max_tokens, temperature = self._generation_controls(options)
        return {
            "model": self.model,
            "messages": [m.model_dump(mode="json") for m in options.messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    async def complete(self, options: AiCompletionOptions) -> AiCompletionResponse:
        headers = {"Authorization": f"Bearer {self._api_key}"}
        data = await self._post_json(self.API_URL, self.build_request(options), headers=headers)

        content = data["choices"][0]["message"]["content"]
        usage = data.get("usage") or {}
        return self._response(content, usage.get("total_tokens"))
