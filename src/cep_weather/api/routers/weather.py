"""
cep_weather.api.routers.weather

Resolver service endpoint.

Responsibilities:
- `GET /weather?cep=<8 digits>`: resolve the city, fetch its temperature and return
  it in Celsius, Fahrenheit and Kelvin.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query
from opentelemetry.trace import SpanKind

from cep_weather.api.deps import inbound_trace_context, tracing_from_app, weather_service_from_app
from cep_weather.services.weather import WeatherLookupService
from cep_weather.tracing.context import TraceContext
from cep_weather.tracing.tracer import Tracing

router = APIRouter()


@router.get("/weather")
async def get_weather(
    cep: str = Query(default=""),
    ctx: TraceContext = Depends(inbound_trace_context),
    tracing: Tracing = Depends(tracing_from_app),
    service: WeatherLookupService = Depends(weather_service_from_app),
) -> dict[str, Any]:
    # Failures propagate as PipelineError and are rendered by `api.errors`.
    with tracing.span("handle_weather", ctx, kind=SpanKind.SERVER, cep=cep) as span_ctx:
        result = await service.lookup(ctx=span_ctx, cep=cep)
    return result.to_wire()


# --- Module Notes -----------------------------------------------------------
# This router does not embed pipeline logic; it delegates to WeatherLookupService.
