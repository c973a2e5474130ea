"""
Capability protocols for traced_errors.

Constructors return plain exceptions. Callers that need the diagnostics narrow
the result with ``isinstance(err, ErrorTracer)`` instead of depending on the
concrete DecoratedError class.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from opentelemetry.trace import SpanContext, Status

from traced_errors.models import SourceLocation, TraceContext

__all__ = ["ErrorTracer", "TracingSpanProtocol"]


@runtime_checkable
class ErrorTracer(Protocol):
    """An error that carries a SourceLocation and a TraceContext."""

    def source_location(self) -> SourceLocation:
        """Return where the error was constructed."""
        ...

    def trace_context(self) -> TraceContext:
        """Return the trace/span identifiers captured for the error."""
        ...

    def set_trace_context(self, span_context: SpanContext) -> None:
        """Overwrite the trace context from a span context."""
        ...

    def set_source_location(self, depth: int) -> None:
        """
        Recapture the source location from the current call stack.

        Args:
            depth: Frames to skip, counted from the setter itself (1 is the
                setter's caller)
        """
        ...


class TracingSpanProtocol(Protocol):
    """
    The slice of an OpenTelemetry span the annotator uses.

    Any span implementation exposing these methods can be passed to the
    traced constructors.
    """

    def get_span_context(self) -> SpanContext: ...

    def add_event(
        self,
        name: str,
        attributes: Mapping[str, Any] | None = None,
        timestamp: int | None = None,
    ) -> None: ...

    def set_status(self, status: Status, description: str | None = None) -> None: ...
