"""Cohere v1 chat API."""

from __future__ import annotations

from typing import Any, Optional

from model_playground.core.providers.base import (
    MAX_TOKENS,
    TEMPERATURE,
    AuthStyle,
    OutboundRequest,
    ProviderSpec,
    bearer_headers,
    dig,
    text_or_none,
)

COHERE_ENDPOINT = "https://api.cohere.ai/v1/chat"


def build_request(model: str, message: str, credential: str) -> OutboundRequest:
    return OutboundRequest(
        url=COHERE_ENDPOINT,
        headers=bearer_headers(credential),
        json={
            "model": model,
            "message": message,
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        },
    )


def extract_text(payload: Any) -> Optional[str]:
    return text_or_none(dig(payload, "text"))


COHERE_SPEC = ProviderSpec(
    provider_id="cohere",
    error_label="Cohere",
    auth_style=AuthStyle.BEARER,
    build_request=build_request,
    extract_text=extract_text,
)
