"""
cep_weather.orchestrator.state

Typed state schemas used by the LangGraph pipelines.

Responsibilities:
- Define the contract between nodes (inputs/outputs) for both services.
- Carry the request's TraceContext explicitly from node to node.
"""

from __future__ import annotations

from typing import Annotated, TypedDict

import httpx

from cep_weather.domain.temperature import WeatherResponse
from cep_weather.errors import PipelineError
from cep_weather.orchestrator.reducers import append_steps
from cep_weather.tracing.context import TraceContext


class WeatherState(TypedDict, total=False):
    # Inputs
    cep: str
    trace_context: TraceContext
    timeout: float

    # Intermediate results
    city: str
    celsius: float

    # Outcome: exactly one of result/error is set when the graph finishes.
    result: WeatherResponse
    error: PipelineError

    steps: Annotated[list[str], append_steps]


class GatewayState(TypedDict, total=False):
    cep: str
    trace_context: TraceContext
    timeout: float

    reply: httpx.Response
    error: PipelineError

    steps: Annotated[list[str], append_steps]


# --- Module Notes -----------------------------------------------------------
# State lives for one request only; nothing here is persisted or shared across requests.
