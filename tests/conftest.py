"""
tests.conftest

Shared fixtures.

Responsibilities:
- Give every test its own `Tracing` backed by an `InMemorySpanExporter`.
"""

from __future__ import annotations

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from cep_weather.tracing.tracer import Tracing


@pytest.fixture()
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture()
def tracing(span_exporter: InMemorySpanExporter) -> Tracing:
    # Synchronous export so spans are visible as soon as they end.
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return Tracing(provider=provider)
