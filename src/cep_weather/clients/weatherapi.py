"""
cep_weather.clients.weatherapi

City-to-temperature client (WeatherAPI current conditions).

Responsibilities:
- Fail fast when the provider credential is missing (no network call).
- Perform one traced lookup per call with a bounded timeout.
- Map transport/status/payload failures to a tagged `WeatherError`.
"""

from __future__ import annotations

import httpx
from opentelemetry.trace import SpanKind
from pydantic import BaseModel, ConfigDict, ValidationError

from cep_weather.clients.http import DEFAULT_TIMEOUT_S
from cep_weather.errors import ErrorKind, WeatherError
from cep_weather.observability.logging import get_logger
from cep_weather.tracing.context import TraceContext, inject
from cep_weather.tracing.tracer import HTTP_STATUS_ATTRIBUTE, Tracing

log = get_logger(__name__)


class CurrentConditions(BaseModel):
    # JSON numbers only; strings and booleans are a decode failure, not a temperature.
    model_config = ConfigDict(strict=True)

    temp_c: float


class CurrentWeatherPayload(BaseModel):
    current: CurrentConditions


class WeatherApiClient:
    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        tracing: Tracing,
        api_key: str,
        base_url: str = "https://api.weatherapi.com",
    ) -> None:
        self._http = http
        self._tracing = tracing
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def fetch_temperature(
        self,
        ctx: TraceContext,
        city: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> float:
        with self._tracing.span("fetch_temperature", ctx, kind=SpanKind.CLIENT, city=city) as span_ctx:
            if not self.configured:
                raise WeatherError(ErrorKind.configuration, "weather api key not configured")

            try:
                r = await self._http.get(
                    f"{self._base_url}/v1/current.json",
                    # httpx encodes the city (spaces, accents) into the query string.
                    params={"key": self._api_key, "q": city},
                    headers=inject(span_ctx, {}),
                    timeout=timeout,
                )
            except httpx.RequestError as e:
                # The request URL carries the key; log/raise only the exception type.
                raise WeatherError(
                    ErrorKind.transport, f"weather lookup failed: {type(e).__name__}"
                ) from e
            self._tracing.annotate(**{HTTP_STATUS_ATTRIBUTE: r.status_code})

            if not r.is_success:
                raise WeatherError(
                    ErrorKind.upstream, f"weather lookup returned status {r.status_code}"
                )

            try:
                payload = CurrentWeatherPayload.model_validate_json(r.content)
            except ValidationError as e:
                raise WeatherError(ErrorKind.decode, "unexpected weather payload") from e

            log.debug("temperature_fetched", city=city, temp_c=payload.current.temp_c)
            return payload.current.temp_c


# --- Module Notes -----------------------------------------------------------
# The API key is only ever placed in the query string; it is never logged or echoed in errors.
