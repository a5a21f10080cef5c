"""
tests.fakes

Fake provider transports for outbound HTTP.

Responsibilities:
- Answer ViaCEP / WeatherAPI / resolver-service traffic with `httpx.MockTransport`.
- Record every request so tests can assert on propagated headers and call counts.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx

VIACEP_HOST = "viacep.com.br"
WEATHER_HOST = "api.weatherapi.com"

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it answered."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


def providers(
    *,
    viacep: Handler | None = None,
    weather: Handler | None = None,
) -> RecordingTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == VIACEP_HOST and viacep is not None:
            return viacep(request)
        if request.url.host == WEATHER_HOST and weather is not None:
            return weather(request)
        raise AssertionError(f"unexpected outbound call: {request.method} {request.url}")

    return RecordingTransport(handler)


def viacep_city(city: str) -> Handler:
    return lambda request: httpx.Response(200, json={"cep": "01310-930", "localidade": city})


def weather_celsius(temp_c: float) -> Handler:
    return lambda request: httpx.Response(200, json={"current": {"temp_c": temp_c}})


def raise_timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectTimeout("timed out", request=request)


def raise_connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


# --- Module Notes -----------------------------------------------------------
# No test touches the network; unexpected outbound calls fail loudly.
