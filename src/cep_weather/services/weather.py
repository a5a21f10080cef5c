"""
cep_weather.services.weather

Resolver-side lookup service.

Responsibilities:
- Run the compiled weather graph for one request under its trace context.
- Return the composed `WeatherResponse` or raise the tagged error the graph stopped on.
"""

from __future__ import annotations

from typing import Any

from cep_weather.clients.http import DEFAULT_TIMEOUT_S
from cep_weather.domain.temperature import WeatherResponse
from cep_weather.observability.logging import get_logger
from cep_weather.orchestrator.state import WeatherState
from cep_weather.tracing.context import TraceContext

log = get_logger(__name__)


class WeatherLookupService:
    def __init__(self, *, graph: Any, timeout: float = DEFAULT_TIMEOUT_S) -> None:
        self._graph = graph
        self._timeout = timeout

    async def lookup(self, *, ctx: TraceContext, cep: str) -> WeatherResponse:
        initial: WeatherState = {"cep": cep, "trace_context": ctx, "timeout": self._timeout}
        final: WeatherState = await self._graph.ainvoke(initial)

        error = final.get("error")
        if error is not None:
            log.info("weather_lookup_stopped", steps=final.get("steps", []), error_kind=error.kind.value)
            raise error

        result = final["result"]
        log.info("weather_lookup_ok", city=result.city, temp_c=result.temp_c)
        return result


# --- Module Notes -----------------------------------------------------------
# The service is stateless; one instance is shared by all concurrent requests.
