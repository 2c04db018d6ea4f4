"""Shared provider error types for cross-protocol normalization."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class GatewayErrorKind(str, Enum):
    """Stable error kinds reported by the gateway."""

    UNSUPPORTED_PROVIDER = "unsupported_provider"
    PROVIDER_HTTP_ERROR = "provider_http_error"
    TRANSPORT_ERROR = "transport_error"


class ProviderMappedError(Exception):
    """Normalized provider exception with a stable error kind."""

    def __init__(self, error_kind: GatewayErrorKind, message: str) -> None:
        super().__init__(message)
        self.error_kind = error_kind


class UnsupportedProviderError(ProviderMappedError):
    """No wire record is registered for the provider id."""

    def __init__(self, provider_id: str) -> None:
        super().__init__(GatewayErrorKind.UNSUPPORTED_PROVIDER, "Unsupported provider")
        self.provider_id = provider_id


class ProviderHttpError(ProviderMappedError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, label: str, status_code: int, reason: Optional[str] = None) -> None:
        message = f"{label} API error: {status_code}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(GatewayErrorKind.PROVIDER_HTTP_ERROR, message)
        self.status_code = status_code


class ProviderTransportError(ProviderMappedError):
    """Network, decoding or extraction failure."""

    def __init__(self, message: str) -> None:
        super().__init__(GatewayErrorKind.TRANSPORT_ERROR, message)
