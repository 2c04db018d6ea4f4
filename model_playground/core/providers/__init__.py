"""Provider wire records keyed by provider id."""

from __future__ import annotations

from typing import Dict, Optional

from model_playground.core.providers.anthropic import ANTHROPIC_SPEC
from model_playground.core.providers.base import GatewayResult, ProviderSpec
from model_playground.core.providers.cohere import COHERE_SPEC
from model_playground.core.providers.gemini import GEMINI_SPEC
from model_playground.core.providers.openai import (
    DEEPSEEK_SPEC,
    MISTRAL_SPEC,
    OPENAI_SPEC,
    PERPLEXITY_SPEC,
    XAI_SPEC,
)
from model_playground.utils.log import get_logger

logger = get_logger()

PROVIDER_SPECS: Dict[str, ProviderSpec] = {
    spec.provider_id: spec
    for spec in (
        OPENAI_SPEC,
        ANTHROPIC_SPEC,
        PERPLEXITY_SPEC,
        GEMINI_SPEC,
        XAI_SPEC,
        DEEPSEEK_SPEC,
        MISTRAL_SPEC,
        COHERE_SPEC,
    )
}


def get_provider_spec(provider_id: str) -> Optional[ProviderSpec]:
    """Return the wire record for a provider id."""
    spec = PROVIDER_SPECS.get(provider_id)
    if spec is None:
        logger.warning("[providers] Unsupported provider", extra={"provider": provider_id})
    return spec


__all__ = ["GatewayResult", "PROVIDER_SPECS", "ProviderSpec", "get_provider_spec"]
