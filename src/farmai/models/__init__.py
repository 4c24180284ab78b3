from .provider import (
    AiCompletionOptions,
    AiCompletionResponse,
    AiMessage,
    AiRole,
    ModelOption,
    ProviderStatus,
)

__all__ = [
    "AiCompletionOptions",
    "AiCompletionResponse",
    "AiMessage",
    "AiRole",
    "ModelOption",
    "ProviderStatus",
]
