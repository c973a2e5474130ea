"""
Error constructors: a drop-in for the New/Errorf/Wrap/Wrapf family.

Each returns a DecoratedError typed as a plain ``Exception``; narrow it with
``isinstance(err, ErrorTracer)`` to read its diagnostics.

Variants:
- ``new``, ``errorf``, ``wrap``, ``wrapf``: capture the location of the caller
- ``*_t``: additionally annotate the given span (None disables annotation)
- ``*_caller*``: take an explicit depth, for helpers built on top of this
  module that must report *their* caller's location

Depth contract (see ``traced_errors.source_location``): depth 0 is
``new_source_location`` itself, 1 is the constructor, 2 is the code calling the
constructor. Convenience constructors must call ``new_source_location`` from
their own body with ``CALLER_DEPTH``; moving that call into a shared helper
shifts every reported location by one frame.
"""

from __future__ import annotations

from typing import Any

from traced_errors.annotator import annotate
from traced_errors.decorated_error import (
    DecoratedError,
    MessageError,
    format_message,
    require_error,
)
from traced_errors.protocols import TracingSpanProtocol
from traced_errors.source_location import CALLER_DEPTH, new_source_location


# Explicit caller depth


def new_caller(depth: int, m: str) -> Exception:
    """Create an error with message ``m``, locating the frame at ``depth``."""
    return DecoratedError(MessageError(m), new_source_location(depth))


def new_caller_t(depth: int, span: TracingSpanProtocol | None, m: str) -> Exception:
    """Like ``new_caller`` and annotate ``span``."""
    err = DecoratedError(MessageError(m), new_source_location(depth))
    return annotate(err, span)


def new_callerf(depth: int, m: str, *args: Any) -> Exception:
    """Create an error with a formatted message, locating the frame at ``depth``."""
    return DecoratedError(MessageError(format_message(m, args)), new_source_location(depth))


def new_callerf_t(depth: int, span: TracingSpanProtocol | None, m: str, *args: Any) -> Exception:
    """Like ``new_callerf`` and annotate ``span``."""
    err = DecoratedError(MessageError(format_message(m, args)), new_source_location(depth))
    return annotate(err, span)


def wrap_caller(depth: int, e: BaseException, m: str) -> Exception:
    """Wrap ``e`` as ``"m: e"``, locating the frame at ``depth``."""
    return DecoratedError(MessageError(m, require_error(e)), new_source_location(depth))


def wrap_caller_t(
    depth: int, span: TracingSpanProtocol | None, e: BaseException, m: str
) -> Exception:
    """Like ``wrap_caller`` and annotate ``span``."""
    err = DecoratedError(MessageError(m, require_error(e)), new_source_location(depth))
    return annotate(err, span)


def wrap_callerf(depth: int, e: BaseException, m: str, *args: Any) -> Exception:
    """Wrap ``e`` with a formatted prefix, locating the frame at ``depth``."""
    return DecoratedError(
        MessageError(format_message(m, args), require_error(e)), new_source_location(depth)
    )


def wrap_callerf_t(
    depth: int, span: TracingSpanProtocol | None, e: BaseException, m: str, *args: Any
) -> Exception:
    """Like ``wrap_callerf`` and annotate ``span``."""
    err = DecoratedError(
        MessageError(format_message(m, args), require_error(e)), new_source_location(depth)
    )
    return annotate(err, span)


# Caller of the constructor


def new(m: str) -> Exception:
    """Create an error with message ``m``."""
    return DecoratedError(MessageError(m), new_source_location(CALLER_DEPTH))


def new_t(span: TracingSpanProtocol | None, m: str) -> Exception:
    """Create an error with message ``m`` and annotate ``span``."""
    err = DecoratedError(MessageError(m), new_source_location(CALLER_DEPTH))
    return annotate(err, span)


def errorf(m: str, *args: Any) -> Exception:
    """Create an error with the printf-style message ``m % args``."""
    return DecoratedError(MessageError(format_message(m, args)), new_source_location(CALLER_DEPTH))


def errorf_t(span: TracingSpanProtocol | None, m: str, *args: Any) -> Exception:
    """Like ``errorf`` and annotate ``span``."""
    err = DecoratedError(MessageError(format_message(m, args)), new_source_location(CALLER_DEPTH))
    return annotate(err, span)


def wrap(e: BaseException, m: str) -> Exception:
    """Wrap ``e`` as ``"m: e"``, keeping ``e`` reachable through ``unwrap``."""
    return DecoratedError(MessageError(m, require_error(e)), new_source_location(CALLER_DEPTH))


def wrap_t(span: TracingSpanProtocol | None, e: BaseException, m: str) -> Exception:
    """Like ``wrap`` and annotate ``span``."""
    err = DecoratedError(MessageError(m, require_error(e)), new_source_location(CALLER_DEPTH))
    return annotate(err, span)


def wrapf(e: BaseException, m: str, *args: Any) -> Exception:
    """Wrap ``e`` with the formatted prefix ``m % args``."""
    return DecoratedError(
        MessageError(format_message(m, args), require_error(e)),
        new_source_location(CALLER_DEPTH),
    )


def wrapf_t(span: TracingSpanProtocol | None, e: BaseException, m: str, *args: Any) -> Exception:
    """Like ``wrapf`` and annotate ``span``."""
    err = DecoratedError(
        MessageError(format_message(m, args), require_error(e)),
        new_source_location(CALLER_DEPTH),
    )
    return annotate(err, span)
