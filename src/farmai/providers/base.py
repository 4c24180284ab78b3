"""AI provider contract and shared HTTP plumbing.

Every provider turns one conversation into one vendor request and normalizes
the reply into an AiCompletionResponse. Providers hold no state between
calls; there is no retry, caching or fallback at this level. Selecting a
provider and recovering from its failures is the caller's job (see
factory.ProviderRegistry).
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import httpx

from ..models.provider import AiCompletionOptions, AiCompletionResponse, AiMessage, AiRole
from ..utils.sanitize import sanitize_error

DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.7


class ProviderError(RuntimeError):
    """Raised when a vendor call fails (non-2xx status or transport error)."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: Optional[int] = None,
        detail: str = "",
    ):
        super().__init__(sanitize_error(message))
        self.provider = provider
        self.status_code = status_code
        self.detail = sanitize_error(detail)


@runtime_checkable
class AiProvider(Protocol):
    """Protocol that all AI providers must implement."""

    name: str

    @property
    def model(self) -> str: ...

    def is_available(self) -> bool: ...

    async def complete(self, options: AiCompletionOptions) -> AiCompletionResponse: ...


class BaseProvider:
    """Base class with shared credential handling and request helpers."""

    name: str = "base"
    label: str = "Base"
    default_model: str = ""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key or ""
        self._model = model or self.default_model
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self._model!r})"

    @property
    def model(self) -> str:
        return self._model

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def complete(self, options: AiCompletionOptions) -> AiCompletionResponse:
        raise NotImplementedError

    @staticmethod
    def _generation_controls(options: AiCompletionOptions) -> tuple[int, float]:
        """Return (max_tokens, temperature) with defaults for unset values."""
        max_tokens = options.max_tokens if options.max_tokens is not None else DEFAULT_MAX_TOKENS
        temperature = options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
        return max_tokens, temperature

    @staticmethod
    def _split_system(
        messages: list[AiMessage],
    ) -> tuple[Optional[AiMessage], list[AiMessage]]:
        """Separate the first system message from the user/assistant turns."""
        system = next((m for m in messages if m.role == AiRole.SYSTEM), None)
        turns = [m for m in messages if m.role != AiRole.SYSTEM]
        return system, turns

    def _response(self, content: str, tokens_used: Optional[int]) -> AiCompletionResponse:
        return AiCompletionResponse(
            content=content,
            provider=self.name,
            model=self._model,
            tokens_used=tokens_used,
        )

    async def _post_json(
        self,
        url: str,
        body: dict,
        headers: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> dict:
        """POST a JSON body and return the decoded reply.

        Non-2xx statuses raise ProviderError carrying the vendor's raw body.
        """
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    url, json=body, headers=request_headers, params=params
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            error_body = e.response.text
            raise ProviderError(
                self.name,
                f"{self.label} API error: {e.response.status_code} | {error_body}",
                status_code=e.response.status_code,
                detail=error_body,
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(self.name, f"{self.label} API error: {e}") from e
