from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from langgraph.graph import END, StateGraph

from cep_weather.clients.resolver_service import ResolverServiceClient
from cep_weather.clients.viacep import ViaCepClient
from cep_weather.clients.weatherapi import WeatherApiClient
from cep_weather.orchestrator.nodes import (
    convert_node,
    fetch_temperature_node,
    forward_node,
    resolve_city_node,
    route_on_error,
    validate_node,
)
from cep_weather.orchestrator.state import GatewayState, WeatherState


def build_weather_graph(*, resolver: ViaCepClient, weather: WeatherApiClient):
    """
    Resolver-side pipeline: validate -> resolve_city -> fetch_temperature -> convert.
    Returns a compiled LangGraph runnable.
    """

    graph = StateGraph(WeatherState)

    graph.add_node("validate", validate_node)
    graph.add_node("resolve_city", _bind(resolve_city_node, resolver=resolver))
    graph.add_node("fetch_temperature", _bind(fetch_temperature_node, weather=weather))
    graph.add_node("convert", convert_node)

    graph.set_entry_point("validate")

    graph.add_conditional_edges(
        "validate", route_on_error, {"continue": "resolve_city", "halt": END}
    )
    graph.add_conditional_edges(
        "resolve_city", route_on_error, {"continue": "fetch_temperature", "halt": END}
    )
    graph.add_conditional_edges(
        "fetch_temperature", route_on_error, {"continue": "convert", "halt": END}
    )
    graph.add_edge("convert", END)

    return graph.compile()


def build_gateway_graph(*, downstream: ResolverServiceClient):
    """
    Gateway-side pipeline: validate -> forward.
    """

    graph = StateGraph(GatewayState)

    graph.add_node("validate", validate_node)
    graph.add_node("forward", _bind(forward_node, downstream=downstream))

    graph.set_entry_point("validate")

    graph.add_conditional_edges("validate", route_on_error, {"continue": "forward", "halt": END})
    graph.add_edge("forward", END)

    return graph.compile()


def _bind(
    fn: Callable[..., Awaitable[dict[str, Any]]],
    **deps: Any,
) -> Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]:
    async def _wrapped(state: dict[str, Any]) -> dict[str, Any]:
        return await fn(state, **deps)

    return _wrapped
