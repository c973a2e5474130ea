"""
Structured logging utilities for traced_errors using structlog.

Provides the logger used by the library itself and a processor that lifts the
diagnostics of a decorated error into Cloud Logging special fields, so a log
line can be correlated with its trace span and code location.

Key Features:
- ``add_error_diagnostics`` processor for decorated errors passed as
  ``error=`` or ``exc_info=``
- Environment-based output formatting (JSON or console)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor

from traced_errors.chain import as_error
from traced_errors.protocols import ErrorTracer

SOURCE_LOCATION_FIELD = "logging.googleapis.com/sourceLocation"
TRACE_FIELD = "logging.googleapis.com/trace"
SPAN_ID_FIELD = "logging.googleapis.com/spanId"


def _error_from_event(event_dict: dict[str, Any]) -> BaseException | None:
    error = event_dict.get("error")
    if isinstance(error, BaseException):
        return error

    exc_info = event_dict.get("exc_info")
    if exc_info is True:
        exc_info = sys.exc_info()
    if isinstance(exc_info, BaseException):
        return exc_info
    if isinstance(exc_info, tuple) and len(exc_info) == 3 and isinstance(
        exc_info[1], BaseException
    ):
        return exc_info[1]
    return None


def add_error_diagnostics(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    Add source location and trace fields of a decorated error to the log.

    Looks for an exception under ``error`` or ``exc_info`` and searches its
    unwrap chain for the outermost error carrying diagnostics.

    Fields added:
    - logging.googleapis.com/sourceLocation: function/file/line (+ build stamp)
    - logging.googleapis.com/trace: trace ID (only when a trace was captured)
    - logging.googleapis.com/spanId: span ID (only when a trace was captured)

    Args:
        logger: The logger instance (unused but required by structlog)
        method_name: The logging method name (unused but required by structlog)
        event_dict: The log event dictionary to enrich

    Returns:
        Enriched event dictionary
    """
    error = _error_from_event(event_dict)
    if error is None:
        return event_dict

    tracer = as_error(error, ErrorTracer)
    if tracer is None:
        return event_dict

    event_dict[SOURCE_LOCATION_FIELD] = tracer.source_location().model_dump(
        mode="json", exclude_none=True
    )
    trace_context = tracer.trace_context()
    if not trace_context.is_empty:
        event_dict[TRACE_FIELD] = trace_context.trace_id
        event_dict[SPAN_ID_FIELD] = trace_context.span_id
    return event_dict


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    use_json: bool | None = None,
) -> None:
    """
    Configure structlog with error diagnostics enabled.

    Args:
        service_name: Name bound to every log line as ``service.name``
        log_level: Logging level (defaults to "INFO")
        use_json: JSON output when True, console output when False; defaults to
            the LOG_FORMAT env var ("json" or "console")
    """
    if use_json is None:
        use_json = os.getenv("LOG_FORMAT", "").lower() == "json"

    shared: list[Processor] = [
        merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        add_error_diagnostics,
    ]
    processors: list[Processor]
    if use_json:
        processors = [
            *shared,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared,
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(**{"service.name": service_name})


def create_logger(name: str | None = None) -> Any:
    """
    Create a logger with optional name binding.

    Args:
        name: Optional logger name (e.g., "traced_errors.annotator")

    Returns:
        A structlog BoundLogger instance
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
