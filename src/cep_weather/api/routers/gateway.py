"""
cep_weather.api.routers.gateway

Gateway entry endpoint.

Responsibilities:
- `POST /request-weather` with `{"cep": "<8 digits>"}`.
- Relay the resolver service's status code and body verbatim.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from opentelemetry.trace import SpanKind

from cep_weather.api.deps import gateway_service_from_app, inbound_trace_context, tracing_from_app
from cep_weather.domain.zipcode import PostalCodeRequest
from cep_weather.services.gateway import GatewayRelayService
from cep_weather.tracing.context import TraceContext
from cep_weather.tracing.tracer import Tracing

router = APIRouter()


@router.post("/request-weather")
async def request_weather(
    request: Request,
    ctx: TraceContext = Depends(inbound_trace_context),
    tracing: Tracing = Depends(tracing_from_app),
    service: GatewayRelayService = Depends(gateway_service_from_app),
) -> Response:
    with tracing.span("handle_request_weather", ctx, kind=SpanKind.SERVER) as span_ctx:
        # Body is parsed by hand so malformed JSON is a 400, not FastAPI's 422.
        body = PostalCodeRequest.parse(await request.body())
        reply = await service.relay(ctx=span_ctx, cep=body.cep)

    return Response(
        content=reply.content,
        status_code=reply.status_code,
        media_type=reply.headers.get("content-type"),
    )


# --- Module Notes -----------------------------------------------------------
# Other methods on /request-weather are answered 405 by the router and rendered by `api.errors`.
