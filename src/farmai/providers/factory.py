"""Provider registry: builds the configured providers and picks the active one."""

from __future__ import annotations

from typing import Mapping, Optional

from rich.console import Console

from ..core.config import DEFAULT_CONFIG, PROVIDER_NAMES, resolve_api_key
from ..models.provider import ProviderStatus
from .anthropic import ClaudeProvider
from .base import BaseProvider
from .catalog import AVAILABLE_MODELS, PROVIDER_LABELS, default_model, is_known_model
from .gemini import GeminiProvider
from .groq import GroqProvider
from .mock import MockProvider
from .openai_provider import OpenAiProvider

console = Console(stderr=True)

PROVIDER_CLASSES: dict[str, type[BaseProvider]] = {
    "openai": OpenAiProvider,
    "gemini": GeminiProvider,
    "claude": ClaudeProvider,
    "groq": GroqProvider,
}


def _check_name(name: str) -> None:
    if name not in PROVIDER_NAMES:
        raise ValueError(f"Unknown AI provider: {name}")


class ProviderRegistry:
    """Holds one instance per configured provider.

    A networked provider is registered only when a credential is found for
    it; Mock is always registered and is the fallback when the selected
    provider cannot be used.
    """

    def __init__(self, config: dict, environ: Optional[Mapping[str, str]] = None):
        ai_config = config.get("ai", DEFAULT_CONFIG["ai"])
        self._ai_config = ai_config
        self._timeout = ai_config.get("timeout_seconds")
        self._api_keys: dict[str, str] = {}
        self._models: dict[str, str] = {}
        self._providers: dict[str, BaseProvider] = {}

        for name in PROVIDER_CLASSES:
            section = ai_config.get(name) or {}
            api_key = resolve_api_key(section, environ)
            if not api_key:
                continue
            self._api_keys[name] = api_key
            self._models[name] = section.get("model") or default_model(name)
            self._providers[name] = self._build(name, self._models[name])

        self._models["mock"] = (ai_config.get("mock") or {}).get("model") or default_model("mock")
        self._providers["mock"] = self._build("mock", self._models["mock"])

        current = ai_config.get("provider") or "mock"
        _check_name(current)
        self._current = current

    def _build(self, name: str, model: str) -> BaseProvider:
        if name == "mock":
            delay = (self._ai_config.get("mock") or {}).get("delay_seconds", 0.5)
            return MockProvider(model=model, delay_seconds=delay)
        return PROVIDER_CLASSES[name](
            self._api_keys[name], model=model, timeout=self._timeout
        )

    @property
    def current_provider_name(self) -> str:
        return self._current

    @property
    def current_model(self) -> str:
        return self._models.get(self._current, default_model("mock"))

    def get_provider(self) -> BaseProvider:
        """Return the selected provider, or Mock when it is not usable."""
        provider = self._providers.get(self._current)
        if provider is None or not provider.is_available():
            console.print(
                f"  [yellow]WARN[/yellow] Provider {self._current} not available, "
                f"falling back to mock"
            )
            return self._providers["mock"]
        return provider

    def get_provider_by_name(self, name: str) -> Optional[BaseProvider]:
        return self._providers.get(name)

    def set_provider(self, name: str) -> bool:
        """Switch the active provider. Only registered providers are accepted."""
        if name not in self._providers:
            return False
        self._current = name
        return True

    def set_model(self, provider_name: str, model: str) -> bool:
        """Rebuild a provider with another catalog model."""
        if not is_known_model(provider_name, model):
            return False
        if provider_name != "mock" and provider_name not in self._api_keys:
            return False

        self._models[provider_name] = model
        self._providers[provider_name] = self._build(provider_name, model)
        return True

    def get_available_providers(self) -> list[ProviderStatus]:
        statuses = []
        for name in PROVIDER_NAMES:
            provider = self._providers.get(name)
            statuses.append(
                ProviderStatus(
                    name=name,
                    label=PROVIDER_LABELS[name],
                    model=self._models.get(name) or default_model(name),
                    models=AVAILABLE_MODELS[name],
                    available=provider is not None and provider.is_available(),
                )
            )
        return statuses


def get_ai_provider(
    config: dict,
    provider_override: Optional[str] = None,
    model_override: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BaseProvider:
    """Factory function to create the configured AI provider.

    The model override is taken as-is (it need not be in the catalog).
    """
    ai_config = dict(config.get("ai", {}))
    provider_name = provider_override or ai_config.get("provider", "mock")
    _check_name(provider_name)

    ai_config["provider"] = provider_name
    if model_override:
        section = dict(ai_config.get(provider_name) or {})
        section["model"] = model_override
        ai_config[provider_name] = section

    registry = ProviderRegistry({**config, "ai": ai_config}, environ=environ)
    return registry.get_provider()
