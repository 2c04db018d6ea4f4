"""Google Gemini generateContent API."""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

from model_playground.core.providers.base import (
    MAX_TOKENS,
    TEMPERATURE,
    AuthStyle,
    OutboundRequest,
    ProviderSpec,
    dig,
    json_headers,
    text_or_none,
)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


def build_request(model: str, message: str, credential: str) -> OutboundRequest:
    # The key travels as a query parameter; no auth header is sent.
    return OutboundRequest(
        url=f"{GEMINI_API_BASE}/models/{quote(model, safe='.-_')}:generateContent",
        headers=json_headers(),
        params={"key": credential},
        json={
            "contents": [{"parts": [{"text": message}]}],
            "generationConfig": {
                "temperature": TEMPERATURE,
                "maxOutputTokens": MAX_TOKENS,
            },
        },
    )


def extract_text(payload: Any) -> Optional[str]:
    return text_or_none(dig(payload, "candidates", 0, "content", "parts", 0, "text"))


GEMINI_SPEC = ProviderSpec(
    provider_id="google",
    error_label="Google",
    auth_style=AuthStyle.QUERY,
    build_request=build_request,
    extract_text=extract_text,
)
