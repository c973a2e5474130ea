"""
traced_errors: exceptions decorated with source location and trace context.

A drop-in for the New/Errorf/Wrap/Wrapf family of error constructors. Every
error records where it was created and, when built with a span (the ``*_t``
variants), the trace and span identifiers of that span:

    err = traced_errors.new_t(span, "payment declined")
    if isinstance(err, traced_errors.ErrorTracer):
        logger.error(str(err), trace=err.trace_context().trace_id)

Helpers built on top of these constructors should use the ``*_caller*``
variants with an explicit depth so the reported location is their caller.
"""

from .chain import as_error, cause, is_error, iter_chain, unwrap
from .config import configure_build_info, get_build_info, get_settings
from .constructors import (
    errorf,
    errorf_t,
    new,
    new_caller,
    new_caller_t,
    new_callerf,
    new_callerf_t,
    new_t,
    wrap,
    wrap_caller,
    wrap_caller_t,
    wrap_callerf,
    wrap_callerf_t,
    wrap_t,
    wrapf,
    wrapf_t,
)
from .decorated_error import DecoratedError
from .models import BuildInfo, SourceLocation, TraceContext
from .protocols import ErrorTracer, TracingSpanProtocol
from .source_location import CALLER_DEPTH, new_source_location

__all__ = [
    "BuildInfo",
    "CALLER_DEPTH",
    "DecoratedError",
    "ErrorTracer",
    "SourceLocation",
    "TraceContext",
    "TracingSpanProtocol",
    "as_error",
    "cause",
    "configure_build_info",
    "errorf",
    "errorf_t",
    "get_build_info",
    "get_settings",
    "is_error",
    "iter_chain",
    "new",
    "new_caller",
    "new_caller_t",
    "new_callerf",
    "new_callerf_t",
    "new_source_location",
    "new_t",
    "unwrap",
    "wrap",
    "wrap_caller",
    "wrap_caller_t",
    "wrap_callerf",
    "wrap_callerf_t",
    "wrap_t",
    "wrapf",
    "wrapf_t",
]
