"""Groq provider (Llama, Mixtral, Gemma) over the OpenAI-compatible API."""

from __future__ import annotations

from .openai_provider import OpenAiProvider


class GroqProvider(OpenAiProvider):
    name = "groq"
    label = "Groq"
    default_model = "llama-3.1-70b-versatile"
    API_URL = "https://api.groq.com/openai/v1/chat/completions"
