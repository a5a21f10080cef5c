"""
cep_weather.tracing.tracer

Process-scoped span recording.

Responsibilities:
- Build the OpenTelemetry tracer provider + Zipkin exporter once at startup.
- Open child spans for named units of work and record their outcome.
- Keep export off the request path (batch processor, background thread).
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace
from typing import Any

import httpx
from opentelemetry import trace
from opentelemetry.exporter.zipkin.json import ZipkinExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ALWAYS_OFF, ALWAYS_ON, ParentBased
from opentelemetry.trace import SpanKind

from cep_weather.errors import PipelineError
from cep_weather.observability.logging import get_logger
from cep_weather.settings import ServiceSettings
from cep_weather.tracing.context import TraceContext

log = get_logger(__name__)

OUTCOME_ATTRIBUTE = "outcome"
ERROR_KIND_ATTRIBUTE = "error.kind"
HTTP_STATUS_ATTRIBUTE = "http.status_code"


class TracingSetupError(RuntimeError):
    pass


class Tracing:
    """
    Injected into the app (app.state) and into every component that opens spans.
    No global tracer provider is installed.
    """

    def __init__(
        self,
        *,
        provider: TracerProvider,
        sampled: bool = True,
        instrumentation_name: str = "cep_weather",
    ) -> None:
        self._provider = provider
        self._tracer = provider.get_tracer(instrumentation_name)
        # Sampling decision for requests that arrive without a trace context.
        self.sampled = sampled

    @contextmanager
    def span(
        self,
        name: str,
        parent: TraceContext,
        *,
        kind: SpanKind = SpanKind.INTERNAL,
        **attributes: Any,
    ) -> Iterator[TraceContext]:
        with self._tracer.start_as_current_span(
            name,
            context=parent.to_otel(),
            kind=kind,
            attributes=attributes or None,
        ) as span:
            sc = span.get_span_context()
            child = replace(
                parent,
                trace_id=sc.trace_id,
                span_id=sc.span_id,
                sampled=sc.trace_flags.sampled,
            )
            try:
                yield child
            except BaseException as e:
                span.set_attribute(OUTCOME_ATTRIBUTE, "failure")
                if isinstance(e, PipelineError):
                    span.set_attribute(ERROR_KIND_ATTRIBUTE, e.kind.value)
                raise
            else:
                span.set_attribute(OUTCOME_ATTRIBUTE, "success")

    def annotate(self, **attributes: Any) -> None:
        # Applies to the innermost span opened by `span()` in the current task.
        trace.get_current_span().set_attributes(attributes)

    def shutdown(self) -> None:
        # Flushes pending batches; exporter errors are logged by the SDK, never raised here.
        self._provider.shutdown()


def build_tracing(settings: ServiceSettings) -> Tracing:
    """
    Startup-time construction. Any failure here is fatal for the process.
    """

    try:
        endpoint = httpx.URL(settings.zipkin_endpoint)
    except httpx.InvalidURL as e:
        raise TracingSetupError(f"invalid zipkin endpoint: {settings.zipkin_endpoint!r}") from e
    if endpoint.scheme not in ("http", "https") or not endpoint.host:
        raise TracingSetupError(f"invalid zipkin endpoint: {settings.zipkin_endpoint!r}")

    try:
        exporter = ZipkinExporter(endpoint=str(endpoint))
    except Exception as e:
        raise TracingSetupError(f"cannot build zipkin exporter: {e}") from e

    provider = TracerProvider(
        resource=Resource.create({SERVICE_NAME: settings.service_name}),
        sampler=ParentBased(ALWAYS_ON if settings.trace_sampled else ALWAYS_OFF),
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    log.info("tracing_configured", endpoint=str(endpoint), sampled=settings.trace_sampled)
    return Tracing(provider=provider, sampled=settings.trace_sampled)


# --- Module Notes -----------------------------------------------------------
# Span names used across the services: handle_request_weather, forward_to_resolver,
# handle_weather, resolve_city, fetch_temperature.
