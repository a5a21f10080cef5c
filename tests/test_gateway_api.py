"""
tests.test_gateway_api

Gateway service scenarios, alone and chained to a real resolver app.
"""

from __future__ import annotations

import httpx
import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import SpanKind

from cep_weather.api.app import create_gateway_app, create_resolver_app
from cep_weather.settings import GatewaySettings, ResolverSettings
from cep_weather.tracing.context import extract
from cep_weather.tracing.tracer import Tracing
from fakes import (
    RecordingTransport,
    providers,
    raise_connect_error,
    viacep_city,
    weather_celsius,
)

RESOLVER_URL = "http://resolver"
RESOLVER_BODY = '{"city":"São Paulo","temp_C":25,"temp_F":77,"temp_K":298}'.encode()


def _client(
    transport: httpx.AsyncBaseTransport, tracing: Tracing, *, url: str | None = RESOLVER_URL
) -> httpx.AsyncClient:
    app = create_gateway_app(
        settings=GatewaySettings(resolver_service_url=url),
        http=httpx.AsyncClient(transport=transport),
        tracing=tracing,
    )
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


def _resolver_replies(status: int, content: bytes) -> RecordingTransport:
    return RecordingTransport(
        lambda r: httpx.Response(
            status, content=content, headers={"content-type": "application/json"}
        )
    )


@pytest.mark.asyncio
async def test_relays_resolver_body_verbatim(tracing: Tracing) -> None:
    transport = _resolver_replies(200, RESOLVER_BODY)

    async with _client(transport, tracing) as client:
        r = await client.post("/request-weather", json={"cep": "01310930"})

    assert r.status_code == 200
    assert r.content == RESOLVER_BODY
    assert r.headers["content-type"] == "application/json"

    (request,) = transport.requests
    assert request.method == "GET"
    assert request.url.path == "/weather"
    assert request.url.params["cep"] == "01310930"


@pytest.mark.asyncio
async def test_relays_resolver_failure_status(tracing: Tracing) -> None:
    body = b'{"error":"can not find zipcode"}'
    transport = _resolver_replies(404, body)

    async with _client(transport, tracing) as client:
        r = await client.post("/request-weather", json={"cep": "00000000"})

    assert r.status_code == 404
    assert r.content == body


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"cep": "123"}, {"cep": "0131093a"}, {}])
async def test_invalid_zipcode_is_422_without_forwarding(tracing: Tracing, payload) -> None:
    transport = _resolver_replies(200, RESOLVER_BODY)

    async with _client(transport, tracing) as client:
        r = await client.post("/request-weather", json=payload)

    assert r.status_code == 422
    assert r.json() == {"error": "invalid zipcode"}
    assert transport.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [b"{not json", b'{"cep": 1310930}', b"[]", b""])
async def test_malformed_body_is_400(tracing: Tracing, content: bytes) -> None:
    transport = _resolver_replies(200, RESOLVER_BODY)

    async with _client(transport, tracing) as client:
        r = await client.post(
            "/request-weather", content=content, headers={"content-type": "application/json"}
        )

    assert r.status_code == 400
    assert r.json() == {"error": "invalid request body"}
    assert transport.requests == []


@pytest.mark.asyncio
async def test_other_methods_are_405(tracing: Tracing) -> None:
    transport = _resolver_replies(200, RESOLVER_BODY)

    async with _client(transport, tracing) as client:
        r = await client.get("/request-weather")

    assert r.status_code == 405
    assert r.json() == {"error": "method not allowed"}
    assert "POST" in r.headers["allow"]


@pytest.mark.asyncio
async def test_missing_resolver_url_is_500(tracing: Tracing) -> None:
    transport = _resolver_replies(200, RESOLVER_BODY)

    async with _client(transport, tracing, url=None) as client:
        r = await client.post("/request-weather", json={"cep": "01310930"})
        ready = await client.get("/readyz")

    assert r.status_code == 500
    assert r.json() == {"error": "downstream service not configured"}
    assert transport.requests == []
    assert ready.status_code == 503


@pytest.mark.asyncio
async def test_unreachable_resolver_is_500(
    tracing: Tracing, span_exporter: InMemorySpanExporter
) -> None:
    async with _client(RecordingTransport(raise_connect_error), tracing) as client:
        r = await client.post("/request-weather", json={"cep": "01310930"})

    assert r.status_code == 500
    assert r.json() == {"error": "failed to contact downstream"}

    spans = {s.name: s for s in span_exporter.get_finished_spans()}
    assert spans["forward_to_resolver"].attributes["error.kind"] == "transport"
    assert spans["handle_request_weather"].attributes["outcome"] == "failure"


@pytest.mark.asyncio
async def test_forwarded_request_carries_trace_and_baggage(
    tracing: Tracing, span_exporter: InMemorySpanExporter
) -> None:
    transport = _resolver_replies(200, RESOLVER_BODY)

    async with _client(transport, tracing) as client:
        r = await client.post(
            "/request-weather", json={"cep": "01310930"}, headers={"baggage": "tenant=acme"}
        )

    (request,) = transport.requests
    sent = extract(request.headers)
    spans = {s.name: s for s in span_exporter.get_finished_spans()}

    assert sent.trace_id_hex == r.headers["x-trace-id"]
    assert sent.span_id == spans["forward_to_resolver"].context.span_id
    assert sent.baggage == (("tenant", "acme"),)
    assert spans["handle_request_weather"].kind is SpanKind.SERVER
    assert (
        spans["forward_to_resolver"].parent.span_id
        == spans["handle_request_weather"].context.span_id
    )


@pytest.mark.asyncio
async def test_both_services_share_one_trace(
    tracing: Tracing, span_exporter: InMemorySpanExporter
) -> None:
    outbound = providers(viacep=viacep_city("São Paulo"), weather=weather_celsius(25))
    resolver_app = create_resolver_app(
        settings=ResolverSettings(weather_api_key="test-key"),
        http=httpx.AsyncClient(transport=outbound),
        tracing=tracing,
    )

    async with _client(httpx.ASGITransport(app=resolver_app), tracing) as client:
        r = await client.post("/request-weather", json={"cep": "01310930"})

    assert r.status_code == 200
    assert r.json() == {"city": "São Paulo", "temp_C": 25, "temp_F": 77, "temp_K": 298}

    spans = {s.name: s for s in span_exporter.get_finished_spans()}
    assert set(spans) == {
        "handle_request_weather",
        "forward_to_resolver",
        "handle_weather",
        "resolve_city",
        "fetch_temperature",
    }
    assert len({s.context.trace_id for s in spans.values()}) == 1
    assert format(spans["handle_weather"].context.trace_id, "032x") == r.headers["x-trace-id"]
    assert spans["handle_weather"].parent.span_id == spans["forward_to_resolver"].context.span_id
    assert spans["resolve_city"].parent.span_id == spans["handle_weather"].context.span_id
