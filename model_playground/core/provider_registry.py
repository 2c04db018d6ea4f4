"""Static catalog of chat providers and the models each one exposes."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class ProviderDescriptor(BaseModel):
    """Provider metadata shown by the selection UI."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str
    display_name: str
    model_ids: Tuple[str, ...]
    key_placeholder: str = ""
    key_help: str = ""

    @field_validator("id")
    @classmethod
    def _id_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Provider id must not be empty.")
        return value

    @field_validator("model_ids")
    @classmethod
    def _models_non_empty_and_unique(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if not value:
            raise ValueError("A provider must expose at least one model.")
        seen: set[str] = set()
        for model_id in value:
            if model_id in seen:
                raise ValueError(f"Duplicate model id '{model_id}'.")
            seen.add(model_id)
        return value

    @property
    def default_model(self) -> str:
        return self.model_ids[0]

    def offers(self, model_id: str) -> bool:
        return model_id in self.model_ids


_PROVIDERS: Tuple[ProviderDescriptor, ...] = (
    ProviderDescriptor(
        id="openai",
        display_name="OpenAI",
        model_ids=(
            "gpt-5-2025-08-07",
            "gpt-5-mini-2025-08-07",
            "gpt-5-nano-2025-08-07",
            "gpt-4.1-2025-04-14",
            "o3-2025-04-16",
            "o4-mini-2025-04-16",
            "gpt-4.1-mini-2025-04-14",
            "gpt-4o",
            "gpt-4o-mini",
            "gpt-3.5-turbo",
        ),
        key_placeholder="sk-...",
        key_help="Enter your OpenAI API key from platform.openai.com",
    ),
    ProviderDescriptor(
        id="anthropic",
        display_name="Anthropic",
        model_ids=(
            "claude-opus-4-20250514",
            "claude-sonnet-4-20250514",
            "claude-3-5-haiku-20241022",
            "claude-3-7-sonnet-20250219",
            "claude-3-5-sonnet-20241022",
            "claude-3-opus-20240229",
            "claude-3-sonnet-20240229",
            "claude-3-haiku-20240307",
        ),
        key_placeholder="sk-ant-...",
        key_help="Enter your Anthropic API key from console.anthropic.com",
    ),
    ProviderDescriptor(
        id="perplexity",
        display_name="Perplexity",
        model_ids=(
            "llama-3.1-sonar-huge-128k-online",
            "llama-3.1-sonar-large-128k-online",
            "llama-3.1-sonar-small-128k-online",
        ),
        key_placeholder="pplx-...",
        key_help="Enter your Perplexity API key from perplexity.ai",
    ),
    ProviderDescriptor(
        id="google",
        display_name="Google",
        model_ids=(
            "gemini-2.5-pro",
            "gemini-2.5-flash",
            "gemini-1.5-pro",
            "gemini-1.5-flash",
        ),
        key_placeholder="AIza...",
        key_help="Enter your Gemini API key from aistudio.google.com",
    ),
    ProviderDescriptor(
        id="xai",
        display_name="xAI",
        model_ids=("grok-4", "grok-3", "grok-3-mini"),
        key_placeholder="xai-...",
        key_help="Enter your xAI API key from console.x.ai",
    ),
    ProviderDescriptor(
        id="deepseek",
        display_name="DeepSeek",
        model_ids=("deepseek-chat", "deepseek-reasoner"),
        key_placeholder="sk-...",
        key_help="Enter your DeepSeek API key from platform.deepseek.com",
    ),
    ProviderDescriptor(
        id="mistral",
        display_name="Mistral",
        model_ids=("mistral-large-latest", "mistral-small-latest", "codestral-latest"),
        key_help="Enter your Mistral API key from console.mistral.ai",
    ),
    ProviderDescriptor(
        id="cohere",
        display_name="Cohere",
        model_ids=("command-r-plus", "command-r", "command"),
        key_help="Enter your Cohere API key from dashboard.cohere.com",
    ),
)

_BY_ID: Dict[str, ProviderDescriptor] = {provider.id: provider for provider in _PROVIDERS}


def list_providers() -> Tuple[ProviderDescriptor, ...]:
    """Return every provider in display order."""
    return _PROVIDERS


def provider_ids() -> Tuple[str, ...]:
    return tuple(provider.id for provider in _PROVIDERS)


def find_provider(provider_id: str) -> Optional[ProviderDescriptor]:
    """Return the provider with the given id, or None if it is not in the catalog."""
    if not provider_id:
        return None
    return _BY_ID.get(provider_id)
