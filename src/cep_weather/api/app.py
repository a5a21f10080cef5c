"""
cep_weather.api.app

FastAPI app factories for the gateway and resolver services.

Responsibilities:
- Build each FastAPI application and register routers/middleware/error handlers.
- Create shared infrastructure once (tracing, outbound HTTP pool, compiled graphs)
  and dispose what the app owns on shutdown.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from cep_weather import __version__
from cep_weather.api.errors import register_error_handlers
from cep_weather.api.routers.gateway import router as gateway_router
from cep_weather.api.routers.health import router as health_router
from cep_weather.api.routers.weather import router as weather_router
from cep_weather.clients.http import build_http_client
from cep_weather.clients.resolver_service import ResolverServiceClient
from cep_weather.clients.viacep import ViaCepClient
from cep_weather.clients.weatherapi import WeatherApiClient
from cep_weather.observability.logging import configure_logging, get_logger
from cep_weather.observability.middleware import TraceContextMiddleware
from cep_weather.orchestrator.graph import build_gateway_graph, build_weather_graph
from cep_weather.services.gateway import GatewayRelayService
from cep_weather.services.weather import WeatherLookupService
from cep_weather.settings import GatewaySettings, ResolverSettings, ServiceSettings
from cep_weather.tracing.tracer import Tracing, build_tracing

log = get_logger(__name__)


def create_gateway_app(
    *,
    settings: GatewaySettings,
    http: httpx.AsyncClient | None = None,
    tracing: Tracing | None = None,
) -> FastAPI:
    app = _create_base_app(
        settings=settings, title="CEP Weather Gateway", http=http, tracing=tracing
    )

    downstream = ResolverServiceClient(
        http=app.state.http,
        tracing=app.state.tracing,
        base_url=settings.resolver_service_url,
    )
    app.state.gateway_service = GatewayRelayService(
        graph=build_gateway_graph(downstream=downstream),
        timeout=settings.request_timeout_s,
    )
    app.state.configured = downstream.configured
    if not downstream.configured:
        log.warning("resolver_service_url_missing")

    app.include_router(gateway_router, tags=["gateway"])
    return app


def create_resolver_app(
    *,
    settings: ResolverSettings,
    http: httpx.AsyncClient | None = None,
    tracing: Tracing | None = None,
) -> FastAPI:
    app = _create_base_app(
        settings=settings, title="CEP Weather Resolver", http=http, tracing=tracing
    )

    resolver = ViaCepClient(
        http=app.state.http,
        tracing=app.state.tracing,
        base_url=settings.viacep_base_url,
    )
    weather = WeatherApiClient(
        http=app.state.http,
        tracing=app.state.tracing,
        api_key=settings.weather_api_key,
        base_url=settings.weather_api_base_url,
    )
    app.state.weather_service = WeatherLookupService(
        graph=build_weather_graph(resolver=resolver, weather=weather),
        timeout=settings.request_timeout_s,
    )
    app.state.configured = weather.configured
    if not weather.configured:
        log.warning("weather_api_key_missing")

    app.include_router(weather_router, tags=["weather"])
    return app


def _create_base_app(
    *,
    settings: ServiceSettings,
    title: str,
    http: httpx.AsyncClient | None,
    tracing: Tracing | None,
) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    # Injected collaborators (tests) are not closed by the app.
    owns_http = http is None
    owns_tracing = tracing is None
    # A tracer that cannot be built aborts startup (TracingSetupError propagates).
    tracing = tracing if tracing is not None else build_tracing(settings)
    http = http if http is not None else build_http_client(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", port=settings.port)
        try:
            yield
        finally:
            if owns_http:
                await http.aclose()
            if owns_tracing:
                tracing.shutdown()
            log.info("shutdown")

    app = FastAPI(
        title=title,
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.tracing = tracing
    app.state.http = http

    app.add_middleware(TraceContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; pipeline logic stays in services/orchestrator layers.
