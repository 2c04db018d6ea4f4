"""Wire-level tests for the gateway dispatcher."""

from __future__ import annotations

import json
from typing import Callable, List

import httpx
import pytest

from model_playground.core.gateway import GatewayDispatcher
from model_playground.core.providers.base import NO_RESPONSE_TEXT
from model_playground.core.providers.error_mapping import map_transport_error
from model_playground.core.providers.errors import GatewayErrorKind, UnsupportedProviderError

Handler = Callable[[httpx.Request], httpx.Response]


def _dispatcher(handler: Handler, seen: List[httpx.Request]) -> GatewayDispatcher:
    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    return GatewayDispatcher(
        client_factory=lambda: httpx.AsyncClient(transport=httpx.MockTransport(_record))
    )


@pytest.mark.asyncio
async def test_openai_success_round_trip() -> None:
    seen: List[httpx.Request] = []
    dispatcher = _dispatcher(
        lambda request: httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": "Hello!"}}]}
        ),
        seen,
    )

    result = await dispatcher.send("openai", "gpt-4o", "hi there", "sk-test")

    assert not result.is_error
    assert result.content == "Hello!"
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.openai.com/v1/chat/completions"
    assert request.headers["authorization"] == "Bearer sk-test"
    body = json.loads(request.content)
    assert body["messages"] == [{"role": "user", "content": "hi there"}]
    assert body["max_tokens"] == 2000
    assert body["temperature"] == 0.7


@pytest.mark.asyncio
async def test_google_key_sent_as_query_param() -> None:
    seen: List[httpx.Request] = []
    dispatcher = _dispatcher(
        lambda request: httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "from gemini"}]}}]}
        ),
        seen,
    )

    result = await dispatcher.send("google", "gemini-2.5-flash", "hi", "AIza-key")

    assert result.content == "from gemini"
    assert seen[0].url.params["key"] == "AIza-key"
    assert seen[0].url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
    assert "authorization" not in seen[0].headers


@pytest.mark.asyncio
async def test_anthropic_headers_and_extraction() -> None:
    seen: List[httpx.Request] = []
    dispatcher = _dispatcher(
        lambda request: httpx.Response(200, json={"content": [{"type": "text", "text": "claude"}]}),
        seen,
    )

    result = await dispatcher.send("anthropic", "claude-3-haiku-20240307", "hi", "sk-ant")

    assert result.content == "claude"
    assert seen[0].headers["x-api-key"] == "sk-ant"
    assert seen[0].headers["anthropic-version"] == "2023-06-01"


@pytest.mark.asyncio
async def test_cohere_extraction() -> None:
    seen: List[httpx.Request] = []
    dispatcher = _dispatcher(lambda request: httpx.Response(200, json={"text": "cohere"}), seen)

    result = await dispatcher.send("cohere", "command-r", "hi", "co-key")

    assert result.content == "cohere"
    assert json.loads(seen[0].content)["message"] == "hi"


@pytest.mark.asyncio
async def test_missing_text_uses_sentinel() -> None:
    seen: List[httpx.Request] = []
    dispatcher = _dispatcher(lambda request: httpx.Response(200, json={"choices": []}), seen)

    result = await dispatcher.send("deepseek", "deepseek-chat", "hi", "k")

    assert not result.is_error
    assert result.content == NO_RESPONSE_TEXT


@pytest.mark.asyncio
async def test_http_error_reports_status_and_label() -> None:
    seen: List[httpx.Request] = []
    dispatcher = _dispatcher(
        lambda request: httpx.Response(401, json={"error": {"message": "bad key"}}), seen
    )

    result = await dispatcher.send("xai", "grok-3", "hi", "k")

    assert result.is_error
    assert result.error_kind == GatewayErrorKind.PROVIDER_HTTP_ERROR
    assert result.status_code == 401
    assert result.detail == "Grok API error: 401 Unauthorized"
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_server_error_is_not_retried() -> None:
    seen: List[httpx.Request] = []
    dispatcher = _dispatcher(lambda request: httpx.Response(503), seen)

    result = await dispatcher.send("mistral", "mistral-large-latest", "hi", "k")

    assert result.error_kind == GatewayErrorKind.PROVIDER_HTTP_ERROR
    assert result.status_code == 503
    assert "Mistral API error: 503" in (result.detail or "")
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_connection_failure_becomes_transport_error() -> None:
    def _fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)

    dispatcher = _dispatcher(_fail, [])

    result = await dispatcher.send("openai", "gpt-4o", "hi", "k")

    assert result.error_kind == GatewayErrorKind.TRANSPORT_ERROR
    assert result.detail == "Connection error: name resolution failed"
    assert result.status_code is None


@pytest.mark.asyncio
async def test_timeout_becomes_transport_error() -> None:
    def _timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("read timed out", request=request)

    dispatcher = _dispatcher(_timeout, [])

    result = await dispatcher.send("perplexity", "llama-3.1-sonar-small-128k-online", "hi", "k")

    assert result.error_kind == GatewayErrorKind.TRANSPORT_ERROR
    assert (result.detail or "").startswith("Request timed out")


@pytest.mark.asyncio
async def test_invalid_json_becomes_transport_error() -> None:
    dispatcher = _dispatcher(lambda request: httpx.Response(200, content=b"<html>oops</html>"), [])

    result = await dispatcher.send("openai", "gpt-4o", "hi", "k")

    assert result.error_kind == GatewayErrorKind.TRANSPORT_ERROR
    assert (result.detail or "").startswith("Invalid response body")


@pytest.mark.asyncio
async def test_unsupported_provider_makes_no_request() -> None:
    seen: List[httpx.Request] = []
    dispatcher = _dispatcher(lambda request: httpx.Response(200, json={}), seen)

    result = await dispatcher.send("watsonx", "granite", "hi", "k")

    assert result.error_kind == GatewayErrorKind.UNSUPPORTED_PROVIDER
    assert result.detail == "Unsupported provider"
    assert result.status_code is None
    assert seen == []


def test_unsupported_provider_error_maps_to_itself() -> None:
    exc = UnsupportedProviderError("watsonx")

    mapped = map_transport_error(exc)

    assert mapped is exc
    assert mapped.error_kind == GatewayErrorKind.UNSUPPORTED_PROVIDER
    assert exc.provider_id == "watsonx"
