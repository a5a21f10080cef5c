from __future__ import annotations

from cep_weather.observability.logging import _stamp_active_span, _stamp_service
from cep_weather.tracing.context import TraceContext
from cep_weather.tracing.tracer import Tracing


def test_events_inside_a_span_carry_its_id(tracing: Tracing) -> None:
    with tracing.span("resolve_city", TraceContext.root()) as ctx:
        event = _stamp_active_span(None, "info", {"event": "x"})
    assert event["span_id"] == ctx.span_id_hex


def test_events_outside_spans_are_left_alone() -> None:
    assert _stamp_active_span(None, "info", {"event": "x"}) == {"event": "x"}


def test_service_name_does_not_override_explicit_value() -> None:
    stamp = _stamp_service("service-b")
    assert stamp(None, "info", {})["service"] == "service-b"
    assert stamp(None, "info", {"service": "other"})["service"] == "other"
