"""
cep_weather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (settings, tracing, services).
- Provide the request's inbound TraceContext.
"""

from __future__ import annotations

from fastapi import Request

from cep_weather.services.gateway import GatewayRelayService
from cep_weather.services.weather import WeatherLookupService
from cep_weather.settings import ServiceSettings
from cep_weather.tracing.context import TraceContext, extract
from cep_weather.tracing.tracer import Tracing


def settings_from_app(request: Request) -> ServiceSettings:
    return request.app.state.settings  # type: ignore[attr-defined]


def tracing_from_app(request: Request) -> Tracing:
    # Built once in the app factory; see `cep_weather.api.app`.
    return request.app.state.tracing  # type: ignore[attr-defined]


def inbound_trace_context(request: Request) -> TraceContext:
    # Normally set by TraceContextMiddleware; extract again if the middleware is absent.
    ctx = getattr(request.state, "trace_context", None)
    if ctx is None:
        ctx = extract(request.headers, sampled=tracing_from_app(request).sampled)
    return ctx


def weather_service_from_app(request: Request) -> WeatherLookupService:
    return request.app.state.weather_service  # type: ignore[attr-defined]


def gateway_service_from_app(request: Request) -> GatewayRelayService:
    return request.app.state.gateway_service  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Everything here is process-scoped except the TraceContext, which is per request.
