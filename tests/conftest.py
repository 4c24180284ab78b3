"""Shared fixtures for farmai tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import httpx
import pytest

from farmai.models.provider import AiCompletionOptions, AiMessage, AiRole


class RecordedHttp:
    """Routes httpx.AsyncClient traffic to a handler and keeps the requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            500, text="no handler"
        )

    def reply(self, status_code: int = 200, payload=None, text: str | None = None) -> None:
        if text is not None:
            self.handler = lambda request: httpx.Response(status_code, text=text)
        else:
            self.handler = lambda request: httpx.Response(status_code, json=payload)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_body(self) -> dict:
        return json.loads(self.last_request.content)

    def dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def http(monkeypatch) -> RecordedHttp:
    """Replace httpx.AsyncClient with one backed by httpx.MockTransport."""
    recorder = RecordedHttp()
    transport = httpx.MockTransport(recorder.dispatch)
    real_client = httpx.AsyncClient

    def client_factory(*args, **kwargs):
        kwargs["transport"] = transport
        return real_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)
    return recorder


@pytest.fixture
def conversation() -> AiCompletionOptions:
    """A system message followed by a user/assistant/user exchange."""
    return AiCompletionOptions(
        messages=[
            AiMessage(role=AiRole.SYSTEM, content="คุณคือผู้ช่วยเกษตรกร"),
            AiMessage(role=AiRole.USER, content="ควรปลูกอะไรดี"),
            AiMessage(role=AiRole.ASSISTANT, content="ลองปลูกผักบุ้ง"),
            AiMessage(role=AiRole.USER, content="ต้องรดน้ำบ่อยไหม"),
        ]
    )


@pytest.fixture
def system_and_user() -> AiCompletionOptions:
    return AiCompletionOptions(
        messages=[
            AiMessage(role=AiRole.SYSTEM, content="Answer briefly."),
            AiMessage(role=AiRole.USER, content="When should I plant rice?"),
        ]
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a minimal farmai.yaml."""
    path = tmp_path / "farmai.yaml"
    path.write_text(
        "ai:\n"
        "  provider: groq\n"
        "  groq:\n"
        "    model: llama-3.1-8b-instant\n",
        encoding="utf-8",
    )
    return path
