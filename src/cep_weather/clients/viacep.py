"""
cep_weather.clients.viacep

Postal-code-to-city client (ViaCEP).

Responsibilities:
- Perform one traced lookup per call with a bounded timeout.
- Map transport/status/payload failures to a tagged `ResolveError`.
"""

from __future__ import annotations

import httpx
from opentelemetry.trace import SpanKind
from pydantic import BaseModel, ValidationError

from cep_weather.clients.http import DEFAULT_TIMEOUT_S
from cep_weather.errors import ErrorKind, ResolveError
from cep_weather.observability.logging import get_logger
from cep_weather.tracing.context import TraceContext, inject
from cep_weather.tracing.tracer import HTTP_STATUS_ATTRIBUTE, Tracing

log = get_logger(__name__)


class ViaCepPayload(BaseModel):
    # Unknown CEPs come back as 200 {"erro": true}, i.e. without a city.
    localidade: str | None = None


class ViaCepClient:
    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        tracing: Tracing,
        base_url: str = "https://viacep.com.br",
    ) -> None:
        self._http = http
        self._tracing = tracing
        self._base_url = base_url.rstrip("/")

    async def resolve(
        self,
        ctx: TraceContext,
        code: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> str:
        with self._tracing.span("resolve_city", ctx, kind=SpanKind.CLIENT, cep=code) as span_ctx:
            try:
                r = await self._http.get(
                    f"{self._base_url}/ws/{code}/json/",
                    headers=inject(span_ctx, {}),
                    timeout=timeout,
                )
            except httpx.RequestError as e:
                raise ResolveError(ErrorKind.transport, f"postal lookup failed: {e!r}") from e
            self._tracing.annotate(**{HTTP_STATUS_ATTRIBUTE: r.status_code})

            if not r.is_success:
                raise ResolveError(
                    ErrorKind.not_found, f"postal lookup returned status {r.status_code}"
                )

            try:
                payload = ViaCepPayload.model_validate_json(r.content)
            except ValidationError as e:
                raise ResolveError(ErrorKind.decode, "unexpected postal lookup payload") from e

            if not payload.localidade:
                raise ResolveError(ErrorKind.not_found, f"no city for cep {code}")

            log.debug("city_resolved", cep=code, city=payload.localidade)
            return payload.localidade


# --- Module Notes -----------------------------------------------------------
# No retries: a failed attempt surfaces immediately and the caller owns the user-facing mapping.
