from __future__ import annotations

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import SpanKind

from cep_weather.errors import ErrorKind, ResolveError
from cep_weather.settings import ServiceSettings
from cep_weather.tracing.context import TraceContext
from cep_weather.tracing.tracer import Tracing, TracingSetupError, build_tracing


def test_span_is_child_of_parent_context(
    tracing: Tracing, span_exporter: InMemorySpanExporter
) -> None:
    parent = TraceContext.root().with_baggage("tenant", "acme")

    with tracing.span("resolve_city", parent, kind=SpanKind.CLIENT, cep="01310930") as child:
        assert child.trace_id == parent.trace_id
        assert child.span_id != parent.span_id
        assert child.baggage == parent.baggage

    (span,) = span_exporter.get_finished_spans()
    assert span.name == "resolve_city"
    assert span.kind is SpanKind.CLIENT
    assert span.context.trace_id == parent.trace_id
    assert span.context.span_id == child.span_id
    assert span.parent is not None and span.parent.span_id == parent.span_id
    assert span.attributes["cep"] == "01310930"
    assert span.attributes["outcome"] == "success"


def test_span_records_failure_and_reraises(
    tracing: Tracing, span_exporter: InMemorySpanExporter
) -> None:
    with pytest.raises(ResolveError):
        with tracing.span("resolve_city", TraceContext.root()):
            raise ResolveError(ErrorKind.decode, "bad payload")

    (span,) = span_exporter.get_finished_spans()
    assert span.attributes["outcome"] == "failure"
    assert span.attributes["error.kind"] == "decode"
    assert not span.status.is_ok


def test_nested_spans_share_trace(tracing: Tracing, span_exporter: InMemorySpanExporter) -> None:
    root = TraceContext.root()
    with tracing.span("handle_weather", root) as outer:
        with tracing.span("fetch_temperature", outer) as inner:
            assert inner.trace_id == root.trace_id

    inner_span, outer_span = span_exporter.get_finished_spans()
    assert inner_span.parent.span_id == outer_span.context.span_id
    assert {s.context.trace_id for s in (inner_span, outer_span)} == {root.trace_id}


def test_unsampled_parent_is_not_exported(
    tracing: Tracing, span_exporter: InMemorySpanExporter
) -> None:
    parent = TraceContext.root(sampled=False)
    with tracing.span("handle_weather", parent) as child:
        assert child.sampled is False
        assert child.span_id != parent.span_id
    assert span_exporter.get_finished_spans() == ()


@pytest.mark.parametrize("endpoint", ["not a url", "ftp://zipkin/api/v2/spans", "http://"])
def test_build_tracing_rejects_bad_endpoint(endpoint: str) -> None:
    with pytest.raises(TracingSetupError):
        build_tracing(ServiceSettings(zipkin_endpoint=endpoint))


def test_build_tracing_uses_settings() -> None:
    tracing = build_tracing(
        ServiceSettings(zipkin_endpoint="http://localhost:9411/api/v2/spans", trace_sampled=False)
    )
    try:
        assert tracing.sampled is False
    finally:
        tracing.shutdown()
