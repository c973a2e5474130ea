"""
Diagnostic data models attached to decorated errors.

These are PURE data models: frozen pydantic values with no behavior beyond
serialisation. Field aliases follow the Cloud Logging LogEntry schema so the
models can be dropped straight into a structured log line.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_BUILD_VALUE = "UNKNOWN"


class SourceLocation(BaseModel):
    """
    Where an error was constructed in the code.

    See https://cloud.google.com/logging/docs/reference/v2/rest/v2/LogEntry#LogEntrySourceLocation
    """

    function: str = ""
    file: str = ""
    line: int = 0
    version: Optional[str] = None
    commit: Optional[str] = None
    branch: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class TraceContext(BaseModel):
    """
    Trace and span identifiers linking an error to a tracing span.

    Both identifiers are lowercase hex strings, or both are empty.
    """

    trace_id: str = Field(default="", alias="trace")
    span_id: str = Field(default="", alias="spanId")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def is_empty(self) -> bool:
        return not self.trace_id and not self.span_id


class BuildInfo(BaseModel):
    """Build stamp copied into every captured SourceLocation."""

    version: str = UNKNOWN_BUILD_VALUE
    commit: str = UNKNOWN_BUILD_VALUE
    branch: str = UNKNOWN_BUILD_VALUE

    model_config = ConfigDict(frozen=True)
