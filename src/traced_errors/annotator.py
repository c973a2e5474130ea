"""
Bridge between decorated errors and an active OpenTelemetry span.

Annotation is best-effort instrumentation: it runs synchronously inside the
constructor, and a failing span implementation is logged, never propagated to
the code constructing the error.
"""

from __future__ import annotations

from typing import Any

from opentelemetry.trace import Status, StatusCode

from traced_errors.config import get_settings
from traced_errors.decorated_error import DecoratedError
from traced_errors.logging_utils import create_logger
from traced_errors.protocols import TracingSpanProtocol

logger = create_logger("traced_errors.annotator")


def span_attributes(error: DecoratedError) -> dict[str, Any]:
    """Build the span event attributes describing where ``error`` was created."""
    location = error.source_location()
    attributes: dict[str, Any] = {
        "function": location.function,
        "file": location.file,
        "line": location.line,
    }
    for key in ("version", "commit", "branch"):
        value = getattr(location, key)
        if value:
            attributes[key] = value
    return attributes


def annotate(error: DecoratedError, span: TracingSpanProtocol | None) -> DecoratedError:
    """
    Record ``error`` on ``span`` and copy the span's identifiers onto the error.

    With no span, or a span whose context is invalid, the error is returned
    with an empty trace context and the span is left untouched. Otherwise the
    span receives an ``"Error: <message>"`` event carrying the source location
    attributes, and its status is set to ERROR unless MARK_SPAN_ERROR is off.

    Args:
        error: The freshly constructed error
        span: Span to annotate, or None

    Returns:
        The same error instance
    """
    if span is None:
        return error

    try:
        span_context = span.get_span_context()
        if not span_context.is_valid:
            logger.debug("Span context is invalid, skipping error annotation")
            return error

        error.set_trace_context(span_context)
        span.add_event(f"Error: {error}", attributes=span_attributes(error))

        if get_settings().MARK_SPAN_ERROR:
            span.set_status(Status(StatusCode.ERROR))
    except Exception as e:
        logger.warning(
            "Failed to annotate span with error",
            error_message=str(error),
            annotation_error=str(e),
            exc_info=True,
        )

    return error
