"""Anthropic Claude messages provider."""

from __future__ import annotations

from ..models.provider import AiCompletionOptions, AiCompletionResponse
from .base import BaseProvider


class ClaudeProvider(BaseProvider):
    name = "claude"
    label = "Claude"
    default_model = "claude-3-haiku-20240307"
    API_URL = "https://api.anthropic.com/v1/messages"
    API_VERSION = "2023-06-01"

    def build_request(self, options: AiCompletionOptions) -> dict:
        # Anthropic rejects system turns inside `messages`
        system, turns = self._split_system(options.messages)
        max_tokens, _ = self._generation_controls(options)

        body: dict = {"model": self.model, "max_tokens": max_tokens}
        if system is not None:
            body["system"] = system.content
        body["messages"] = [m.model_dump(mode="json") for m in turns]
        return body

    async def complete(self, options: AiCompletionOptions) -> AiCompletionResponse:
        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": self.API_VERSION,
        }
        data = await self._post_json(self.API_URL, self.build_request(options), headers=headers)

        content = data["content"][0]["text"]
        usage = data.get("usage")
        tokens = None
        if usage:
            tokens = usage.get("input_tokens", 0) + usage.get("output_tokens", 0)
        return self._response(content, tokens)
