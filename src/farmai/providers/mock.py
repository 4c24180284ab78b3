"""Mock provider for development without an API key.

Answers from a handful of canned Thai farming replies chosen by keyword.
"""

from __future__ import annotations

import asyncio
import json
from typing import Optional

from ..models.provider import AiCompletionOptions, AiCompletionResponse, AiRole
from .base import BaseProvider

PLANTING_REPLY = {
    "recommendation": "ผักบุ้ง",
    "reason": "เหมาะกับสภาพอากาศปัจจุบัน ปลูกง่าย โตเร็ว",
    "confidence": 0.85,
}

# Checked in order: "ปลูก" (plant) first, the generic "แนะนำ" (recommend) last.
MOCK_REPLIES: list[tuple[tuple[str, ...], dict]] = [
    (("ปลูก",), PLANTING_REPLY),
    (
        ("ปุ๋ย", "ใส่"),
        {
            "fertilizer": "ปุ๋ยสูตร 15-15-15",
            "amount": "25 กก./ไร่",
            "timing": "ช่วงเช้าหรือเย็น หลังรดน้ำ",
            "confidence": 0.80,
        },
    ),
    (
        ("โรค", "แมลง"),
        {
            "disease": "เพลี้ยไฟ",
            "treatment": "พ่นสารสกัดสะเดา หรือใช้น้ำสบู่เจือจาง",
            "prevention": "ดูแลระบายน้ำให้ดี ไม่ให้น้ำขัง",
            "confidence": 0.75,
        },
    ),
    (
        ("รดน้ำ", "น้ำ"),
        {
            "recommendation": "รดน้ำเช้าและเย็น",
            "amount": "ประมาณ 30 ลิตร/ไร่",
            "note": "หลีกเลี่ยงการรดน้ำตอนแดดจัด",
            "confidence": 0.82,
        },
    ),
    (("แนะนำ",), PLANTING_REPLY),
]

FALLBACK_REPLY = {
    "message": "ขอบคุณสำหรับคำถาม ระบบ AI จะประมวลผลและให้คำแนะนำที่เหมาะสม",
    "note": "นี่เป็น Mock Response สำหรับ Development",
    "confidence": 0.5,
}


class MockProvider(BaseProvider):
    name = "mock"
    label = "Mock (Development)"
    default_model = "mock-v1"

    def __init__(self, model: Optional[str] = None, delay_seconds: float = 0.5):
        super().__init__(api_key=None, model=model)
        self.delay_seconds = delay_seconds

    def is_available(self) -> bool:
        return True

    async def complete(self, options: AiCompletionOptions) -> AiCompletionResponse:
        user_message = next(
            (m.content for m in reversed(options.messages) if m.role == AiRole.USER),
            "",
        )
        content = generate_mock_reply(user_message)

        # Simulated network latency
        await asyncio.sleep(self.delay_seconds)

        # Character count stands in for a token count
        return self._response(content, len(content))


def generate_mock_reply(user_message: str) -> str:
    text = user_message.lower()
    for keywords, reply in MOCK_REPLIES:
        if any(kw in text for kw in keywords):
            return json.dumps(reply, ensure_ascii=False)
    return json.dumps(FALLBACK_REPLY, ensure_ascii=False)
