"""
Source location capture from the live call stack.

Depth contract: ``depth`` is the number of frames to skip, counted from the
frame of ``new_source_location`` itself.

    depth 0  new_source_location
    depth 1  the function that called new_source_location (e.g. ``new``)
    depth 2  that function's caller (the user code calling ``new``)

Every convenience constructor calls ``new_source_location(CALLER_DEPTH)``
directly from its own body, so no helper frame may sit between the constructor
and the capture call. A wrong depth does not raise; it reports the wrong frame,
or an empty location when the depth runs past the top of the stack.
"""

from __future__ import annotations

import sys

from traced_errors.config import get_build_info
from traced_errors.models import SourceLocation

# Skip new_source_location and the constructor that called it.
CALLER_DEPTH = 2


def new_source_location(depth: int) -> SourceLocation:
    """
    Create a SourceLocation for the frame ``depth`` levels up the stack.

    Args:
        depth: Frames to skip; 0 is this function's own frame

    Returns:
        SourceLocation with the module-qualified function name, file and line,
        plus the process build stamp. Empty location if the frame does not exist.
    """
    build = get_build_info()
    if depth < 0:
        return SourceLocation(version=build.version, commit=build.commit, branch=build.branch)

    try:
        frame = sys._getframe(depth)
    except ValueError:
        # Call stack is not deep enough
        return SourceLocation(version=build.version, commit=build.commit, branch=build.branch)

    code = frame.f_code
    module = frame.f_globals.get("__name__", "")
    function = f"{module}.{code.co_qualname}" if module else code.co_qualname

    return SourceLocation(
        function=function,
        file=code.co_filename,
        line=frame.f_lineno,
        version=build.version,
        commit=build.commit,
        branch=build.branch,
    )
