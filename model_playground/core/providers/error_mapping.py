"""Helpers that turn raw transport failures into normalized provider errors."""

from __future__ import annotations

import json

import httpx

from model_playground.core.providers.errors import (
    ProviderMappedError,
    ProviderTransportError,
)

_TIMEOUT_HINTS = ("timed out", "timeout")


def is_timeout_message(message: str) -> bool:
    """Return True when an error message describes timeout-like behavior."""
    lowered = message.lower()
    return any(hint in lowered for hint in _TIMEOUT_HINTS)


def describe_exception(exc: BaseException) -> str:
    """Human-readable text for an exception, falling back to its type name."""
    text = str(exc).strip()
    return text or type(exc).__name__


def map_transport_error(exc: Exception) -> ProviderMappedError:
    """Map any failure raised while calling a provider to a normalized error."""
    if isinstance(exc, ProviderMappedError):
        return exc
    message = describe_exception(exc)
    if isinstance(exc, httpx.TimeoutException) or is_timeout_message(message):
        return ProviderTransportError(f"Request timed out: {message}")
    if isinstance(exc, httpx.TransportError):
        return ProviderTransportError(f"Connection error: {message}")
    if isinstance(exc, (json.JSONDecodeError, UnicodeDecodeError)):
        return ProviderTransportError(f"Invalid response body: {message}")
    return ProviderTransportError(message)

