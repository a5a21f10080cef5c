"""
cep_weather.tracing

Distributed tracing package.

Responsibilities:
- Trace context carrier (extract/inject across HTTP hops).
- Process-scoped span recording with outcome attributes.
"""

from cep_weather.tracing.context import TraceContext, extract, inject
from cep_weather.tracing.tracer import Tracing, TracingSetupError, build_tracing

__all__ = [
    "TraceContext",
    "Tracing",
    "TracingSetupError",
    "build_tracing",
    "extract",
    "inject",
]


# --- Module Notes -----------------------------------------------------------
# Call sites pass TraceContext values explicitly; nothing here reads ambient span state.
