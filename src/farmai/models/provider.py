"""AI provider data models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AiRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class AiMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: AiRole
    content: str


class AiCompletionOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    messages: list[AiMessage]
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None


class AiCompletionResponse(BaseModel):
    content: str
    provider: str
    model: str
    tokens_used: Optional[int] = None


class ModelOption(BaseModel):
    id: str
    name: str
    description: str = ""


class ProviderStatus(BaseModel):
    name: str
    label: str
    model: str
    models: list[ModelOption] = []
    available: bool = False
