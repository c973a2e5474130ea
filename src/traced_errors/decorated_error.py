"""
DecoratedError: an exception carrying source location and trace context.

The decoration is metadata only. ``str(err)`` is always the underlying error's
message, and ``unwrap()`` exposes the wrapped predecessor so the chain
utilities in ``traced_errors.chain`` see straight through the decoration.
"""

from __future__ import annotations

import warnings
from typing import Any

from opentelemetry.trace import SpanContext, format_span_id, format_trace_id

from traced_errors.chain import unwrap
from traced_errors.models import SourceLocation, TraceContext
from traced_errors.source_location import new_source_location


class MessageError(Exception):
    """
    Plain underlying error built by the constructors.

    Leaf errors carry just a message; wrapping errors also keep a link to the
    error they wrap and render as ``"<message>: <wrapped message>"``.
    """

    def __init__(self, message: str, wrapped: BaseException | None = None) -> None:
        text = message if wrapped is None else f"{message}: {wrapped}"
        super().__init__(text)
        self.message = text
        self._wrapped = wrapped
        if wrapped is not None:
            self.__cause__ = wrapped

    def __str__(self) -> str:
        return self.message

    def unwrap(self) -> BaseException | None:
        return self._wrapped


def format_message(message: str, args: tuple[Any, ...]) -> str:
    """
    Render a printf-style message, never raising.

    With no args the message is returned verbatim. A format string that does
    not match its arguments is rendered literally with a ``%!(BADFORMAT ...)``
    suffix listing the arguments.
    """
    if not args:
        return message
    try:
        return message % args
    except Exception:
        rendered = ", ".join(f"{type(arg).__name__}={_safe_repr(arg)}" for arg in args)
        return f"{message}%!(BADFORMAT {rendered})"


def _safe_repr(arg: Any) -> str:
    try:
        return repr(arg)
    except Exception:
        return f"<unrepresentable {type(arg).__name__}>"


def require_error(e: BaseException) -> BaseException:
    """Reject anything that is not an exception instance."""
    if not isinstance(e, BaseException):
        raise TypeError(f"expected an exception, got {type(e).__name__}")
    return e


class DecoratedError(Exception):
    """
    Exception wrapping an underlying error with diagnostic metadata.

    Owns exactly one underlying error. The underlying error is fixed at
    construction; location and trace context change only through the setters.
    Setters are not synchronised: callers sharing an instance across threads
    must serialise their own updates.
    """

    def __init__(
        self,
        error: BaseException,
        source_location: SourceLocation,
        trace_context: TraceContext | None = None,
    ) -> None:
        super().__init__(str(require_error(error)))
        self._error = error
        self._source_location = source_location
        self._trace_context = trace_context if trace_context is not None else TraceContext()
        self.__cause__ = self.unwrap()

    def __str__(self) -> str:
        return str(self._error)

    def __repr__(self) -> str:
        return (
            f"DecoratedError(message={str(self)!r}, "
            f"function={self._source_location.function}, "
            f"line={self._source_location.line})"
        )

    @property
    def error(self) -> BaseException:
        """The underlying error."""
        return self._error

    def unwrap(self) -> BaseException | None:
        """
        Return the error this one wraps.

        A constructor-built MessageError is transparent: its wrapped error (or
        None for a leaf) is returned. Any other underlying error is returned
        itself so it stays part of the chain.
        """
        if isinstance(self._error, MessageError):
            return unwrap(self._error)
        return self._error

    def cause(self) -> BaseException:
        """
        Return the underlying error.

        Deprecated: use ``unwrap()`` or ``traced_errors.chain.cause``.
        """
        warnings.warn(
            "DecoratedError.cause() is deprecated; use unwrap()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._error

    def source_location(self) -> SourceLocation:
        return self._source_location

    def set_source_location(self, depth: int) -> None:
        """
        Recapture the source location from the current call stack.

        Args:
            depth: Frames to skip counted from this method; 0 is
                set_source_location itself, 1 is its caller
        """
        # +1 skips the frame of new_source_location
        self._source_location = new_source_location(depth + 1)

    def trace_context(self) -> TraceContext:
        return self._trace_context

    def set_trace_context(self, span_context: SpanContext) -> None:
        """Overwrite the trace context with the identifiers of ``span_context``."""
        self._trace_context = TraceContext(
            trace_id=format_trace_id(span_context.trace_id),
            span_id=format_span_id(span_context.span_id),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error and its diagnostics for log pipelines."""
        return {
            "error": str(self),
            "source_location": self._source_location.model_dump(mode="json"),
            "trace_context": self._trace_context.model_dump(mode="json", by_alias=True),
        }
