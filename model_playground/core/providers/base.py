"""Shared abstractions for provider wire records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from model_playground.core.providers.errors import GatewayErrorKind

MAX_TOKENS = 2000
TEMPERATURE = 0.7
NO_RESPONSE_TEXT = "No response received"


class AuthStyle(str, Enum):
    """Where a provider expects the API key."""

    BEARER = "bearer"
    HEADER = "header"
    QUERY = "query"


@dataclass(frozen=True)
class OutboundRequest:
    """A fully-built POST request for one provider call."""

    url: str
    headers: Dict[str, str]
    json: Dict[str, Any]
    params: Dict[str, str] = field(default_factory=dict)


RequestBuilder = Callable[[str, str, str], OutboundRequest]
TextExtractor = Callable[[Any], Optional[str]]


@dataclass(frozen=True)
class ProviderSpec:
    """Everything the gateway needs to talk to one provider.

    ``build_request(model, message, credential)`` produces the outbound call and
    ``extract_text(payload)`` returns the generated text, or None when the
    envelope carries none.
    """

    provider_id: str
    error_label: str
    auth_style: AuthStyle
    build_request: RequestBuilder
    extract_text: TextExtractor


@dataclass
class GatewayResult:
    """Normalized outcome of a gateway call."""

    content: str = ""
    error_kind: Optional[GatewayErrorKind] = None
    detail: Optional[str] = None
    status_code: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.error_kind is not None

    @classmethod
    def success(cls, content: str, **metadata: Any) -> "GatewayResult":
        return cls(content=content, metadata=dict(metadata))

    @classmethod
    def create_error(
        cls,
        error_kind: GatewayErrorKind,
        detail: str,
        status_code: Optional[int] = None,
    ) -> "GatewayResult":
        return cls(error_kind=error_kind, detail=detail, status_code=status_code)


def json_headers(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if extra:
        headers.update(extra)
    return headers


def bearer_headers(credential: str) -> Dict[str, str]:
    return json_headers({"Authorization": f"Bearer {credential}"})


def dig(payload: Any, *path: Any) -> Any:
    """Follow dict keys / list indexes, returning None at the first missing step."""
    current = payload
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def text_or_none(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None
