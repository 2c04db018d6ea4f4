"""Single-call gateway that speaks every provider's wire format.

``GatewayDispatcher.send`` never raises for provider, HTTP or transport
failures; they come back as an error ``GatewayResult``.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import httpx

from model_playground.core.providers import get_provider_spec
from model_playground.core.providers.base import (
    NO_RESPONSE_TEXT,
    GatewayResult,
    ProviderSpec,
)
from model_playground.core.providers.error_mapping import map_transport_error
from model_playground.core.providers.errors import (
    ProviderHttpError,
    ProviderMappedError,
    UnsupportedProviderError,
)
from model_playground.utils.log import get_logger

logger = get_logger()

ClientFactory = Callable[[], httpx.AsyncClient]


class GatewayDispatcher:
    """Maps (provider, model, message, credential) to one HTTP call."""

    def __init__(self, client_factory: Optional[ClientFactory] = None) -> None:
        self._client_factory: ClientFactory = client_factory or httpx.AsyncClient

    async def send(
        self,
        provider_id: str,
        model_id: str,
        message_text: str,
        credential: str,
    ) -> GatewayResult:
        """Send one single-turn request; exactly one attempt, no retries."""
        start = time.perf_counter()
        try:
            spec = get_provider_spec(provider_id)
            if spec is None:
                raise UnsupportedProviderError(provider_id)
            content = await self._call(spec, model_id, message_text, credential)
        except Exception as exc:
            mapped = map_transport_error(exc)
            duration_ms = (time.perf_counter() - start) * 1000
            logger.warning(
                "[gateway] Provider call failed: %s",
                mapped,
                extra={
                    "provider": provider_id,
                    "model": model_id,
                    "error_kind": mapped.error_kind.value,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            return _error_result(mapped)

        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            "[gateway] Provider call succeeded",
            extra={
                "provider": provider_id,
                "model": model_id,
                "duration_ms": round(duration_ms, 2),
                "content_length": len(content),
            },
        )
        return GatewayResult.success(content, duration_ms=duration_ms)

    async def _call(
        self,
        spec: ProviderSpec,
        model_id: str,
        message_text: str,
        credential: str,
    ) -> str:
        request = spec.build_request(model_id, message_text, credential)
        logger.debug(
            "[gateway] Sending request",
            extra={
                "provider": spec.provider_id,
                "model": model_id,
                "auth_style": spec.auth_style.value,
                "message_length": len(message_text),
            },
        )
        async with self._client_factory() as client:
            response = await client.post(
                request.url,
                headers=request.headers,
                params=request.params or None,
                json=request.json,
            )
        if not response.is_success:
            raise ProviderHttpError(spec.error_label, response.status_code, response.reason_phrase)

        payload: Any = response.json()
        return spec.extract_text(payload) or NO_RESPONSE_TEXT


def _error_result(exc: ProviderMappedError) -> GatewayResult:
    status_code = exc.status_code if isinstance(exc, ProviderHttpError) else None
    return GatewayResult.create_error(exc.error_kind, str(exc), status_code=status_code)
