"""Layered configuration for the AI providers.

Loads and merges configuration from:
1. Default settings (built-in)
2. Config file (farmai.yaml)
3. Environment (AI_PROVIDER, <PROVIDER>_MODEL)
4. CLI parameters (override)
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml

PROVIDER_NAMES = ("openai", "gemini", "claude", "groq", "mock")

DEFAULT_CONFIG_FILENAME = "farmai.yaml"

DEFAULT_CONFIG: dict = {
    "ai": {
        "provider": "mock",
        "timeout_seconds": 120,
        "openai": {
            "model": "gpt-3.5-turbo",
            "api_key_env": "OPENAI_API_KEY",
        },
        "gemini": {
            "model": "gemini-1.5-flash",
            "api_key_env": "GEMINI_API_KEY",
        },
        "claude": {
            "model": "claude-3-haiku-20240307",
            "api_key_env": "CLAUDE_API_KEY",
        },
        "groq": {
            "model": "llama-3.1-70b-versatile",
            "api_key_env": "GROQ_API_KEY",
        },
        "mock": {
            "model": "mock-v1",
            "delay_seconds": 0.5,
        },
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Arrays are replaced, not merged."""
    result = {}
    for key in base:
        result[key] = base[key]
    for key, value in override.items():
        base_value = result.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            result[key] = deep_merge(base_value, value)
        else:
            result[key] = value
    return result


def load_config_file(config_path: Optional[Path] = None) -> dict:
    """Load a YAML config file. Missing or empty files give an empty dict."""
    path = config_path or Path.cwd() / DEFAULT_CONFIG_FILENAME
    if not path.exists():
        return {}
    content = path.read_text(encoding="utf-8-sig")  # utf-8-sig strips BOM
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file {path}: expected a mapping")
    return data


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> dict:
    """Build overrides from AI_PROVIDER and <PROVIDER>_MODEL variables."""
    env = os.environ if environ is None else environ
    ai: dict = {}

    if env.get("AI_PROVIDER"):
        ai["provider"] = env["AI_PROVIDER"].strip().lower()

    for name in PROVIDER_NAMES:
        model = env.get(f"{name.upper()}_MODEL")
        if model:
            ai[name] = {"model": model}

    return {"ai": ai} if ai else {}


def resolve_api_key(
    provider_config: dict,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Return the explicit api_key, else the value of the api_key_env variable."""
    if provider_config.get("api_key"):
        return provider_config["api_key"]
    env_var = provider_config.get("api_key_env")
    if not env_var:
        return ""
    env = os.environ if environ is None else environ
    return env.get(env_var, "")


def get_effective_config(
    config_path: Optional[Path] = None,
    cli_overrides: Optional[dict] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> dict:
    """Get the fully resolved configuration."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    file_config = load_config_file(config_path)
    if file_config:
        config = deep_merge(config, file_config)

    env_config = env_overrides(environ)
    if env_config:
        config = deep_merge(config, env_config)

    if cli_overrides:
        config = deep_merge(config, cli_overrides)

    return config
