"""OpenAI-compatible chat completions (OpenAI, Perplexity, xAI, DeepSeek, Mistral)."""

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

OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"
PERPLEXITY_ENDPOINT = "https://api.perplexity.ai/chat/completions"
XAI_ENDPOINT = "https://api.x.ai/v1/chat/completions"
DEEPSEEK_ENDPOINT = "https://api.deepseek.com/chat/completions"
MISTRAL_ENDPOINT = "https://api.mistral.ai/v1/chat/completions"


def build_chat_completion_body(model: str, message: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": message}],
        "max_tokens": MAX_TOKENS,
        "temperature": TEMPERATURE,
    }


def extract_chat_completion_text(payload: Any) -> Optional[str]:
    return text_or_none(dig(payload, "choices", 0, "message", "content"))


def openai_compatible_spec(provider_id: str, error_label: str, endpoint: str) -> ProviderSpec:
    """Build a bearer-auth chat completions record for ``endpoint``."""

    def _build(model: str, message: str, credential: str) -> OutboundRequest:
        return OutboundRequest(
            url=endpoint,
            headers=bearer_headers(credential),
            json=build_chat_completion_body(model, message),
        )

    return ProviderSpec(
        provider_id=provider_id,
        error_label=error_label,
        auth_style=AuthStyle.BEARER,
        build_request=_build,
        extract_text=extract_chat_completion_text,
    )


OPENAI_SPEC = openai_compatible_spec("openai", "OpenAI", OPENAI_ENDPOINT)
PERPLEXITY_SPEC = openai_compatible_spec("perplexity", "Perplexity", PERPLEXITY_ENDPOINT)
XAI_SPEC = openai_compatible_spec("xai", "Grok", XAI_ENDPOINT)
DEEPSEEK_SPEC = openai_compatible_spec("deepseek", "DeepSeek", DEEPSEEK_ENDPOINT)
MISTRAL_SPEC = openai_compatible_spec("mistral", "Mistral", MISTRAL_ENDPOINT)
