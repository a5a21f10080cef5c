"""
cep_weather.clients.resolver_service

Gateway -> resolver service hop.

Responsibilities:
- Refuse to call out when the resolver service address is not configured.
- Forward a validated CEP with the propagated trace context and a bounded timeout.
- Hand back the downstream reply untouched (status, body, content type).
"""

from __future__ import annotations

import httpx
from opentelemetry.trace import SpanKind

from cep_weather.clients.http import DEFAULT_TIMEOUT_S
from cep_weather.errors import DownstreamError, ErrorKind
from cep_weather.observability.logging import get_logger
from cep_weather.tracing.context import TraceContext, inject
from cep_weather.tracing.tracer import HTTP_STATUS_ATTRIBUTE, Tracing

log = get_logger(__name__)


class ResolverServiceClient:
    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        tracing: Tracing,
        base_url: str | None,
    ) -> None:
        self._http = http
        self._tracing = tracing
        self._base_url = base_url.rstrip("/") if base_url else None

    @property
    def configured(self) -> bool:
        return self._base_url is not None

    async def forward(
        self,
        ctx: TraceContext,
        code: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> httpx.Response:
        if self._base_url is None:
            raise DownstreamError(ErrorKind.configuration, "resolver service url not configured")

        with self._tracing.span("forward_to_resolver", ctx, kind=SpanKind.CLIENT, cep=code) as span_ctx:
            try:
                r = await self._http.get(
                    f"{self._base_url}/weather",
                    params={"cep": code},
                    headers=inject(span_ctx, {}),
                    timeout=timeout,
                )
            except httpx.RequestError as e:
                raise DownstreamError(
                    ErrorKind.transport, f"resolver service unreachable: {e!r}"
                ) from e
            # The span carries the status; the reply itself is relayed untouched.
            self._tracing.annotate(**{HTTP_STATUS_ATTRIBUTE: r.status_code})

        # Any status is a business outcome owned by the resolver service.
        log.info("downstream_replied", status_code=r.status_code)
        return r


# --- Module Notes -----------------------------------------------------------
# The gateway never reinterprets downstream errors; only transport failures are its own.
