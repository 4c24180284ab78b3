"""Google Gemini generateContent provider."""

from __future__ import annotations

from typing import Optional

from ..models.provider import AiCompletionOptions, AiCompletionResponse, AiRole
from .base import BaseProvider


class GeminiProvider(BaseProvider):
    name = "gemini"
    label = "Gemini"
    default_model = "gemini-1.5-flash"
    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    @property
    def url(self) -> str:
        return f"{self.BASE_URL}/{self.model}:generateContent"

    def build_request(self, options: AiCompletionOptions) -> dict:
        system, turns = self._split_system(options.messages)
        max_tokens, temperature = self._generation_controls(options)

        contents = [
            {
                "role": "model" if m.role == AiRole.ASSISTANT else "user",
                "parts": [{"text": m.content}],
            }
            for m in turns
        ]

        body: dict = {"contents": contents}
        if system is not None:
            body["systemInstruction"] = {"parts": [{"text": system.content}]}
        body["generationConfig"] = {
            "maxOutputTokens": max_tokens,
            "temperature": temperature,
        }
        return body

    async def complete(self, options: AiCompletionOptions) -> AiCompletionResponse:
        data = await self._post_json(
            self.url, self.build_request(options), params={"key": self._api_key}
        )
        return self._response(_first_candidate_text(data), _total_tokens(data))


def _first_candidate_text(data: dict) -> str:
    """Walk candidates[0].content.parts[0].text, tolerating gaps."""
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not parts:
        return ""
    return parts[0].get("text") or ""


def _total_tokens(data: dict) -> Optional[int]:
    return (data.get("usageMetadata") or {}).get("totalTokenCount")
