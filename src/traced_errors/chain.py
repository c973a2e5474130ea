"""
Unwrap-chain utilities.

An error's chain is the error itself followed by every error reachable by
repeatedly calling ``unwrap``. Errors that define an ``unwrap()`` method are
followed through it; any other exception is followed through ``__cause__`` so
plain ``raise ... from ...`` chains interleave with decorated errors.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterator
from typing import TypeVar, cast

T = TypeVar("T")


def unwrap(err: BaseException) -> BaseException | None:
    """Return the error directly wrapped by ``err``, or None."""
    unwrap_method = getattr(err, "unwrap", None)
    if callable(unwrap_method):
        return cast("BaseException | None", unwrap_method())
    return err.__cause__


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` and each error it wraps, outermost first. Stops on cycles."""
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = unwrap(current)


def is_error(err: BaseException | None, target: BaseException) -> bool:
    """
    Report whether ``target`` appears by identity anywhere in the chain of ``err``.

    Args:
        err: Outermost error of the chain (None never matches)
        target: Sentinel error instance to look for

    Returns:
        True if some error in the chain is ``target``
    """
    return any(node is target for node in iter_chain(err))


def as_error(err: BaseException | None, target_type: type[T]) -> T | None:
    """
    Find the first error in the chain that is an instance of ``target_type``.

    ``target_type`` may be an exception class or a runtime-checkable protocol
    such as ``ErrorTracer``.

    Returns:
        The matching error, or None when no chain node matches
    """
    for node in iter_chain(err):
        if isinstance(node, target_type):
            return node
    return None


def cause(err: BaseException) -> BaseException:
    """
    Return the innermost error of the chain.

    Deprecated: kept for callers of the older causer convention. Prefer
    ``unwrap``/``is_error``/``as_error``.
    """
    warnings.warn(
        "cause() is deprecated; use unwrap(), is_error() or as_error()",
        DeprecationWarning,
        stacklevel=2,
    )
    innermost = err
    for node in iter_chain(err):
        innermost = node
    return innermost
