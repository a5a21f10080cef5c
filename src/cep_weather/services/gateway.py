"""
cep_weather.services.gateway

Gateway relay service.

Responsibilities:
- Run the compiled gateway graph (validate -> forward) for one request.
- Return the resolver service reply verbatim or raise the tagged error.
"""

from __future__ import annotations

from typing import Any

import httpx

from cep_weather.clients.http import DEFAULT_TIMEOUT_S
from cep_weather.orchestrator.state import GatewayState
from cep_weather.tracing.context import TraceContext


class GatewayRelayService:
    def __init__(self, *, graph: Any, timeout: float = DEFAULT_TIMEOUT_S) -> None:
        self._graph = graph
        self._timeout = timeout

    async def relay(self, *, ctx: TraceContext, cep: str) -> httpx.Response:
        initial: GatewayState = {"cep": cep, "trace_context": ctx, "timeout": self._timeout}
        final: GatewayState = await self._graph.ainvoke(initial)

        error = final.get("error")
        if error is not None:
            raise error
        return final["reply"]
