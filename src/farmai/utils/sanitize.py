"""Error message sanitization to prevent credential leakage."""

from __future__ import annotations

import os
import re


def sanitize_error(message: str) -> str:
    """Sanitize error messages to prevent API key and path leakage."""
    if not message:
        return message

    sanitized = message
    # OpenAI, Claude, Groq and Gemini key formats
    sanitized = re.sub(r"sk-ant-[a-zA-Z0-9_-]+", "[REDACTED_KEY]", sanitized)
    sanitized = re.sub(r"sk-[a-zA-Z0-9_-]{20,}", "[REDACTED_KEY]", sanitized)
    sanitized = re.sub(r"gsk_[a-zA-Z0-9]{20,}", "[REDACTED_KEY]", sanitized)
    sanitized = re.sub(r"AIza[0-9A-Za-z_-]{20,}", "[REDACTED_KEY]", sanitized)
    # Gemini: key in the query string
    sanitized = re.sub(r"([?&])key=[^&\s\"']+", r"\1key=[REDACTED]", sanitized)
    # OpenAI and Groq: bearer header
    sanitized = re.sub(r"Bearer\s+\S+", "Bearer [REDACTED]", sanitized)
    sanitized = re.sub(r"Authorization:\s*\S+", "Authorization: [REDACTED]", sanitized)
    # Claude: x-api-key header
    sanitized = re.sub(r"x-api-key:\s*\S+", "x-api-key: [REDACTED]", sanitized)

    home = os.environ.get("USERPROFILE") or os.environ.get("HOME") or ""
    if home and home != "/":
        sanitized = sanitized.replace(home, "[USER_HOME]")

    return sanitized
