from __future__ import annotations

from typing import Any, Literal

from cep_weather.clients.http import DEFAULT_TIMEOUT_S
from cep_weather.clients.resolver_service import ResolverServiceClient
from cep_weather.clients.viacep import ViaCepClient
from cep_weather.clients.weatherapi import WeatherApiClient
from cep_weather.domain.temperature import WeatherResponse
from cep_weather.domain.zipcode import is_valid_zipcode
from cep_weather.errors import DownstreamError, InvalidZipcodeError, ResolveError, WeatherError
from cep_weather.observability.logging import get_logger

log = get_logger(__name__)


async def validate_node(state: dict[str, Any]) -> dict[str, Any]:
    """
    Shared by both pipelines: reject anything that is not an 8-digit CEP
    before any outbound call is made.
    """

    cep = state.get("cep", "")
    if not is_valid_zipcode(cep):
        log.info("zipcode_rejected", cep=cep)
        return {"error": InvalidZipcodeError(cep), "steps": ["validate"]}
    return {"steps": ["validate"]}


async def resolve_city_node(state: dict[str, Any], *, resolver: ViaCepClient) -> dict[str, Any]:
    try:
        city = await resolver.resolve(
            state["trace_context"],
            state["cep"],
            timeout=state.get("timeout", DEFAULT_TIMEOUT_S),
        )
    except ResolveError as e:
        log.warning("resolve_city_failed", error_kind=e.kind.value, error=e.message)
        return {"error": e, "steps": ["resolve_city"]}
    return {"city": city, "steps": ["resolve_city"]}


async def fetch_temperature_node(
    state: dict[str, Any], *, weather: WeatherApiClient
) -> dict[str, Any]:
    try:
        celsius = await weather.fetch_temperature(
            state["trace_context"],
            state["city"],
            timeout=state.get("timeout", DEFAULT_TIMEOUT_S),
        )
    except WeatherError as e:
        log.warning("fetch_temperature_failed", error_kind=e.kind.value, error=e.message)
        return {"error": e, "steps": ["fetch_temperature"]}
    return {"celsius": celsius, "steps": ["fetch_temperature"]}


async def convert_node(state: dict[str, Any]) -> dict[str, Any]:
    result = WeatherResponse.from_celsius(city=state["city"], celsius=state["celsius"])
    return {"result": result, "steps": ["convert"]}


async def forward_node(
    state: dict[str, Any], *, downstream: ResolverServiceClient
) -> dict[str, Any]:
    try:
        reply = await downstream.forward(
            state["trace_context"],
            state["cep"],
            timeout=state.get("timeout", DEFAULT_TIMEOUT_S),
        )
    except DownstreamError as e:
        log.warning("forward_failed", error_kind=e.kind.value, error=e.message)
        return {"error": e, "steps": ["forward"]}
    return {"reply": reply, "steps": ["forward"]}


def route_on_error(state: dict[str, Any]) -> Literal["continue", "halt"]:
    # Linear pipelines: the first recorded error ends the run.
    if state.get("error") is not None:
        return "halt"
    return "continue"
