"""
cep_weather.tracing.context

Trace context carrier for cross-service propagation.

Responsibilities:
- Represent the propagated identifiers (trace id, span id, sampled flag) and baggage
  as an immutable value threaded explicitly through one request's call chain.
- Extract it from inbound headers (W3C `traceparent` + `baggage`), falling back to a
  fresh root context on absent/malformed input.
- Inject it onto outbound headers in the same format.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field, replace

from opentelemetry import baggage as otel_baggage
from opentelemetry import trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.context import Context
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.sdk.trace.id_generator import RandomIdGenerator
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

TRACEPARENT_HEADER = "traceparent"
BAGGAGE_HEADER = "baggage"

_PROPAGATOR = CompositePropagator(
    [TraceContextTextMapPropagator(), W3CBaggagePropagator()]
)
_IDS = RandomIdGenerator()


@dataclass(frozen=True, slots=True)
class TraceContext:
    trace_id: int
    span_id: int
    sampled: bool = True
    baggage: tuple[tuple[str, str], ...] = field(default=())

    @classmethod
    def root(cls, *, sampled: bool = True) -> TraceContext:
        return cls(
            trace_id=_IDS.generate_trace_id(),
            span_id=_IDS.generate_span_id(),
            sampled=sampled,
        )

    def child(self) -> TraceContext:
        # Same trace, same baggage; only the span lineage moves.
        return replace(self, span_id=_IDS.generate_span_id())

    def with_baggage(self, key: str, value: str) -> TraceContext:
        items = dict(self.baggage)
        items[key] = value
        return replace(self, baggage=tuple(items.items()))

    def baggage_value(self, key: str) -> str | None:
        return dict(self.baggage).get(key)

    @property
    def trace_id_hex(self) -> str:
        return trace.format_trace_id(self.trace_id)

    @property
    def span_id_hex(self) -> str:
        return trace.format_span_id(self.span_id)

    def to_otel(self) -> Context:
        span_context = SpanContext(
            trace_id=self.trace_id,
            span_id=self.span_id,
            is_remote=True,
            trace_flags=TraceFlags(TraceFlags.SAMPLED if self.sampled else TraceFlags.DEFAULT),
        )
        ctx = trace.set_span_in_context(NonRecordingSpan(span_context), Context())
        for key, value in self.baggage:
            ctx = otel_baggage.set_baggage(key, value, context=ctx)
        return ctx

    @classmethod
    def from_otel(cls, ctx: Context) -> TraceContext | None:
        span_context = trace.get_current_span(ctx).get_span_context()
        if not span_context.is_valid:
            return None
        return cls(
            trace_id=span_context.trace_id,
            span_id=span_context.span_id,
            sampled=span_context.trace_flags.sampled,
            baggage=_baggage_pairs(ctx),
        )


def _baggage_pairs(ctx: Context) -> tuple[tuple[str, str], ...]:
    return tuple((str(k), str(v)) for k, v in otel_baggage.get_all(ctx).items())


def extract(headers: Mapping[str, str], *, sampled: bool = True) -> TraceContext:
    """
    Parse `traceparent`/`baggage` from inbound headers.

    A missing or malformed `traceparent` yields a fresh root context using the given
    default `sampled` flag; well-formed baggage is kept in either case.
    """

    # Lower-case keys so plain dicts behave like case-insensitive HTTP header maps.
    carrier = {str(k).lower(): v for k, v in headers.items()}
    ctx = _PROPAGATOR.extract(carrier=carrier, context=Context())

    extracted = TraceContext.from_otel(ctx)
    if extracted is not None:
        return extracted
    return replace(TraceContext.root(sampled=sampled), baggage=_baggage_pairs(ctx))


def inject(ctx: TraceContext, headers: MutableMapping[str, str]) -> MutableMapping[str, str]:
    _PROPAGATOR.inject(headers, context=ctx.to_otel())
    return headers


# --- Module Notes -----------------------------------------------------------
# The propagator pair mirrors the one installed by the upstream services this pipeline
# interoperates with, so traces join with any W3C-compliant hop.
