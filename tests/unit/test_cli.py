"""Tests for the farmai CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from farmai.cli.main import cli
from farmai.models.provider import AiCompletionResponse
from farmai.providers import ProviderError


@pytest.fixture
def mock_config(tmp_path: Path) -> Path:
    path = tmp_path / "farmai.yaml"
    path.write_text(
        "ai:\n"
        "  provider: mock\n"
        "  mock:\n"
        "    delay_seconds: 0\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def no_provider_env(monkeypatch):
    for var in ("AI_PROVIDER", "OPENAI_API_KEY", "GEMINI_API_KEY", "CLAUDE_API_KEY", "GROQ_API_KEY"):
        monkeypatch.delenv(var, raising=False)


class TestComplete:
    def test_requires_prompt(self, mock_config):
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(mock_config), "complete"])
        assert result.exit_code == 2

    def test_mock_completion(self, mock_config):
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(mock_config), "complete", "ช่วยแนะนำการใส่ปุ๋ย"])
        assert result.exit_code == 0
        assert "fertilizer" in result.output

    def test_json_output(self, mock_config):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["-c", str(mock_config), "complete", "อยากปลูกผัก", "--json"]
        )
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["provider"] == "mock"
        assert "recommendation" in json.loads(payload["content"])

    @patch("farmai.providers.factory.get_ai_provider")
    def test_passes_options(self, mock_factory, mock_config):
        provider = mock_factory.return_value
        provider.complete = AsyncMock(
            return_value=AiCompletionResponse(content="ok", provider="groq", model="m", tokens_used=3)
        )

        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "-c", str(mock_config), "complete", "hello",
                "--provider", "groq", "--model", "m",
                "--system", "be brief", "--max-tokens", "50", "-t", "0.2",
            ],
        )

        assert result.exit_code == 0
        assert mock_factory.call_args.kwargs == {"provider_override": "groq", "model_override": "m"}
        options = provider.complete.call_args.args[0]
        assert [m.role.value for m in options.messages] == ["system", "user"]
        assert options.max_tokens == 50
        assert options.temperature == 0.2

    @patch("farmai.providers.factory.get_ai_provider")
    def test_provider_error_exits_1(self, mock_factory, mock_config):
        mock_factory.return_value.complete = AsyncMock(
            side_effect=ProviderError("openai", "OpenAI API error: 401 | bad key", status_code=401)
        )
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(mock_config), "complete", "hello"])
        assert result.exit_code == 1

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "farmai.yaml"
        path.write_text("ai: [broken\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(path), "complete", "hi"])
        assert result.exit_code == 1
        assert "Invalid config file" in result.output


class TestUnknownProvider:
    def test_complete_with_unknown_env_provider(self, mock_config, monkeypatch):
        monkeypatch.setenv("AI_PROVIDER", "gpt")
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(mock_config), "complete", "hi"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValueError)
        assert "Unknown AI provider: gpt" in result.output

    def test_providers_with_unknown_env_provider(self, mock_config, monkeypatch):
        monkeypatch.setenv("AI_PROVIDER", "gpt")
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(mock_config), "providers"])
        assert result.exit_code == 1
        assert "Unknown AI provider: gpt" in result.output

    def test_unknown_provider_in_config_file(self, tmp_path):
        path = tmp_path / "farmai.yaml"
        path.write_text("ai:\n  provider: bard\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(path), "complete", "hi"])
        assert result.exit_code == 1
        assert "Unknown AI provider: bard" in result.output


class TestProviders:
    def test_lists_all(self, mock_config):
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(mock_config), "providers"])
        assert result.exit_code == 0
        for name in ("openai", "gemini", "claude", "groq", "mock"):
            assert name in result.output


class TestModels:
    def test_static_listing(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["models", "groq"])
        assert result.exit_code == 0
        assert "gemma2-9b-it" in result.output

    def test_unknown_provider(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["models", "bard"])
        assert result.exit_code == 2

    @patch("farmai.providers.catalog.fetch_models", new_callable=AsyncMock)
    def test_live_listing(self, mock_fetch, mock_config):
        from farmai.models.provider import ModelOption

        mock_fetch.return_value = [ModelOption(id="gpt-live", name="Gpt Live")]
        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(mock_config), "models", "openai", "--live"])
        assert result.exit_code == 0
        assert "gpt-live" in result.output
        assert mock_fetch.call_args.args[0] == "openai"
