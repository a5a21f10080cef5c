"""
cep_weather.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request trace context extraction for consistent log enrichment.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Span recording and propagation live in `cep_weather.tracing`.
