"""Anthropic Messages API."""

from __future__ import annotations

from typing import Any, Optional

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

ANTHROPIC_ENDPOINT = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"


def build_request(model: str, message: str, credential: str) -> OutboundRequest:
    return OutboundRequest(
        url=ANTHROPIC_ENDPOINT,
        headers=json_headers({"x-api-key": credential, "anthropic-version": ANTHROPIC_VERSION}),
        json={
            "model": model,
            "max_tokens": MAX_TOKENS,
            "messages": [{"role": "user", "content": message}],
            "temperature": TEMPERATURE,
        },
    )


def extract_text(payload: Any) -> Optional[str]:
    return text_or_none(dig(payload, "content", 0, "text"))


ANTHROPIC_SPEC = ProviderSpec(
    provider_id="anthropic",
    error_label="Anthropic",
    auth_style=AuthStyle.HEADER,
    build_request=build_request,
    extract_text=extract_text,
)
