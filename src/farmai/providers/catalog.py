"""Model catalog: static per-provider model lists plus live vendor listings."""

from __future__ import annotations

import re
from typing import Optional

import httpx
from rich.console import Console

from ..models.provider import ModelOption

console = Console(stderr=True)

PROVIDER_LABELS: dict[str, str] = {
    "openai": "OpenAI",
    "gemini": "Google Gemini",
    "claude": "Anthropic Claude",
    "groq": "Groq",
    "mock": "Mock (Development)",
}

# First entry of each list is the provider's default model.
AVAILABLE_MODELS: dict[str, list[ModelOption]] = {
    "openai": [
        ModelOption(id="gpt-3.5-turbo", name="GPT-3.5 Turbo", description="เร็ว ราคาถูก"),
        ModelOption(id="gpt-4", name="GPT-4", description="ฉลาดมาก แต่แพง"),
        ModelOption(id="gpt-4-turbo", name="GPT-4 Turbo", description="เร็วกว่า GPT-4"),
        ModelOption(id="gpt-4o", name="GPT-4o", description="รุ่นใหม่ล่าสุด"),
        ModelOption(id="gpt-4o-mini", name="GPT-4o Mini", description="ราคาถูก คุณภาพดี"),
    ],
    "gemini": [
        ModelOption(id="gemini-1.5-flash", name="Gemini 1.5 Flash", description="เร็วมาก ฟรี!"),
        ModelOption(id="gemini-1.5-pro", name="Gemini 1.5 Pro", description="ฉลาดกว่า"),
        ModelOption(id="gemini-2.0-flash-exp", name="Gemini 2.0 Flash", description="รุ่นใหม่ล่าสุด"),
    ],
    "claude": [
        ModelOption(id="claude-3-haiku-20240307", name="Claude 3 Haiku", description="เร็ว ราคาถูก"),
        ModelOption(id="claude-3-sonnet-20240229", name="Claude 3 Sonnet", description="สมดุล"),
        ModelOption(id="claude-3-opus-20240229", name="Claude 3 Opus", description="ฉลาดที่สุด"),
        ModelOption(id="claude-3-5-sonnet-20241022", name="Claude 3.5 Sonnet", description="รุ่นใหม่"),
    ],
    "groq": [
        ModelOption(id="llama-3.1-70b-versatile", name="Llama 3.1 70B", description="ฉลาด ฟรี!"),
        ModelOption(id="llama-3.1-8b-instant", name="Llama 3.1 8B", description="เร็วมาก ฟรี!"),
        ModelOption(id="llama-3.3-70b-versatile", name="Llama 3.3 70B", description="รุ่นใหม่"),
        ModelOption(id="mixtral-8x7b-32768", name="Mixtral 8x7B", description="Mistral AI"),
        ModelOption(id="gemma2-9b-it", name="Gemma 2 9B", description="Google Gemma"),
    ],
    "mock": [
        ModelOption(id="mock-v1", name="Mock v1", description="ข้อมูลจำลอง"),
    ],
}

OPENAI_MODELS_URL = "https://api.openai.com/v1/models"
GROQ_MODELS_URL = "https://api.groq.com/openai/v1/models"
GEMINI_MODELS_URL = "https://generativelanguage.googleapis.com/v1beta/models"


def default_model(provider: str) -> str:
    return AVAILABLE_MODELS[provider][0].id


def is_known_model(provider: str, model: str) -> bool:
    return any(m.id == model for m in AVAILABLE_MODELS.get(provider, []))


def format_model_name(model_id: str) -> str:
    """Turn a model id into a display name, e.g. llama-3.1-8b-instant -> Llama 3.1 8B Instant."""
    name = model_id.replace("-", " ")
    name = re.sub(r"(\d+)b", r"\1B", name, flags=re.IGNORECASE)
    return " ".join(word[:1].upper() + word[1:] for word in name.split(" "))


def _describe_openai(model_id: str) -> str:
    for option in AVAILABLE_MODELS["openai"]:
        if option.id == model_id:
            return option.description
    return ""


def _parse_openai(data: dict) -> list[ModelOption]:
    models = [
        ModelOption(id=m["id"], name=format_model_name(m["id"]), description=_describe_openai(m["id"]))
        for m in data.get("data", [])
        if m["id"].startswith("gpt-") and "instruct" not in m["id"]
    ]
    return sorted(models, key=lambda m: m.id, reverse=True)


def _parse_groq(data: dict) -> list[ModelOption]:
    models = []
    for m in data.get("data", []):
        if m.get("active") is False:
            continue
        context = m.get("context_window")
        models.append(
            ModelOption(
                id=m["id"],
                name=format_model_name(m["id"]),
                description=f"{context // 1000}K context" if context else "",
            )
        )
    return sorted(models, key=lambda m: m.name)


def _parse_gemini(data: dict) -> list[ModelOption]:
    models = []
    for m in data.get("models", []):
        if "generateContent" not in (m.get("supportedGenerationMethods") or []):
            continue
        if "gemini" not in m.get("name", ""):
            continue
        model_id = m["name"].replace("models/", "")
        models.append(
            ModelOption(
                id=model_id,
                name=m.get("displayName") or format_model_name(model_id),
                description=(m.get("description") or "")[:50],
            )
        )
    return models


async def fetch_models(
    provider: str,
    api_key: Optional[str] = None,
    timeout: Optional[float] = None,
) -> list[ModelOption]:
    """List a provider's models from its API, falling back to AVAILABLE_MODELS.

    Claude has no listing endpoint and Mock is local, so both always return
    the static list.
    """
    if provider not in AVAILABLE_MODELS:
        raise ValueError(f"Unknown AI provider: {provider}")

    fallback = list(AVAILABLE_MODELS[provider])
    if provider in ("claude", "mock") or not api_key:
        return fallback

    if provider == "gemini":
        url, headers, params, parse = GEMINI_MODELS_URL, {}, {"key": api_key}, _parse_gemini
    elif provider == "groq":
        url, headers, params, parse = GROQ_MODELS_URL, {"Authorization": f"Bearer {api_key}"}, None, _parse_groq
    else:
        url, headers, params, parse = OPENAI_MODELS_URL, {"Authorization": f"Bearer {api_key}"}, None, _parse_openai

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, headers=headers, params=params)
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        console.print(
            f"  [yellow]WARN[/yellow] Failed to fetch {PROVIDER_LABELS[provider]} models "
            f"({e.response.status_code}), using defaults"
        )
        return fallback
    except httpx.HTTPError as e:
        console.print(
            f"  [yellow]WARN[/yellow] Error fetching {PROVIDER_LABELS[provider]} models "
            f"({type(e).__name__}), using defaults"
        )
        return fallback

    return parse(data) or fallback
