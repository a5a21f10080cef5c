"""
cep_weather.observability.middleware

HTTP middleware for request-scoped trace context.

Responsibilities:
- Extract the inbound trace context once per request (or start a fresh root).
- Bind trace metadata into structlog contextvars and log one line per finished request.
- Echo the trace id on the response for client-side correlation.
"""

from __future__ import annotations

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from cep_weather.observability.logging import get_logger
from cep_weather.tracing.context import extract

TRACE_ID_RESPONSE_HEADER = "x-trace-id"

log = get_logger(__name__)


class TraceContextMiddleware(BaseHTTPMiddleware):
    """
    - Stores the extracted TraceContext on `request.state.trace_context`
    - Binds trace_id/path/method for every log line emitted while handling the request
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        tracing = getattr(request.app.state, "tracing", None)
        sampled = tracing.sampled if tracing is not None else True
        trace_context = extract(request.headers, sampled=sampled)
        request.state.trace_context = trace_context

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            trace_id=trace_context.trace_id_hex,
            path=request.url.path,
            method=request.method,
        )
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[TRACE_ID_RESPONSE_HEADER] = trace_context.trace_id_hex
        return response


# --- Module Notes -----------------------------------------------------------
# Handlers open their SERVER span as a child of `request.state.trace_context`.
