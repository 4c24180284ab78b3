from .anthropic import ClaudeProvider
from .base import AiProvider, BaseProvider, ProviderError
from .factory import ProviderRegistry, get_ai_provider
from .gemini import GeminiProvider
from .groq import GroqProvider
from .mock import MockProvider
from .openai_provider import OpenAiProvider

__all__ = [
    "AiProvider",
    "BaseProvider",
    "ClaudeProvider",
    "GeminiProvider",
    "GroqProvider",
    "MockProvider",
    "OpenAiProvider",
    "ProviderError",
    "ProviderRegistry",
    "get_ai_provider",
]
