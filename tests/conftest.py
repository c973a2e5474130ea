from __future__ import annotations

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import Span, SpanContext

from traced_errors.config import reset_build_info

TEST_TRACE_ID = 0xABCDEF123456789012345678ABCDEF12
TEST_SPAN_ID = 0x1234567890ABCDEF


@pytest.fixture(autouse=True)
def isolated_build_info() -> Generator[None, None, None]:
    """Reload settings and build stamp around every test."""
    reset_build_info()
    yield
    reset_build_info()


@pytest.fixture
def span_context() -> SpanContext:
    """Provide a valid span context with fixed identifiers."""
    return SpanContext(trace_id=TEST_TRACE_ID, span_id=TEST_SPAN_ID, is_remote=False)


@pytest.fixture
def mock_span(span_context: SpanContext) -> MagicMock:
    """Provide a mock OpenTelemetry span reporting ``span_context``."""
    span: MagicMock = MagicMock(spec=Span)
    span.get_span_context.return_value = span_context
    span.is_recording.return_value = True
    return span


@pytest.fixture
def tracer_setup() -> tuple[InMemorySpanExporter, trace.Tracer]:
    """Provide a real SDK tracer exporting finished spans to memory."""
    span_exporter = InMemorySpanExporter()
    tracer_provider = TracerProvider()
    tracer_provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    tracer = tracer_provider.get_tracer(__name__)
    return span_exporter, tracer
