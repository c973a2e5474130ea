"""
Configuration for traced_errors.

Settings are loaded from environment variables (prefix ``TRACED_ERRORS_``) and
an optional .env file. The build stamp (version/commit/branch) is written by the
build pipeline into the environment of the deployed image and read once; it is
read-only for the rest of the process lifetime.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from traced_errors.models import UNKNOWN_BUILD_VALUE, BuildInfo


class TracedErrorsSettings(BaseSettings):
    """
    Configuration settings for error decoration.

    Settings are loaded from .env files and environment variables.
    """

    # Build stamp, e.g. TRACED_ERRORS_VERSION=1.4.2
    VERSION: str = Field(default=UNKNOWN_BUILD_VALUE, description="Build version")
    COMMIT: str = Field(default=UNKNOWN_BUILD_VALUE, description="Build commit hash")
    BRANCH: str = Field(default=UNKNOWN_BUILD_VALUE, description="Build branch name")

    MARK_SPAN_ERROR: bool = Field(
        default=True,
        description="Set span status to ERROR when an error is annotated onto it",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="TRACED_ERRORS_",
    )


@lru_cache
def get_settings() -> TracedErrorsSettings:
    """Get cached settings instance."""
    return TracedErrorsSettings()


_build_info: BuildInfo | None = None


def configure_build_info(
    version: str = UNKNOWN_BUILD_VALUE,
    commit: str = UNKNOWN_BUILD_VALUE,
    branch: str = UNKNOWN_BUILD_VALUE,
) -> BuildInfo:
    """
    Install the process-wide build stamp.

    Call once at startup, before any error is constructed. Errors created
    afterwards carry these values in their SourceLocation.
    """
    global _build_info
    _build_info = BuildInfo(version=version, commit=commit, branch=branch)
    return _build_info


def get_build_info() -> BuildInfo:
    """Return the build stamp, loading it from settings on first use."""
    global _build_info
    if _build_info is None:
        settings = get_settings()
        _build_info = BuildInfo(
            version=settings.VERSION,
            commit=settings.COMMIT,
            branch=settings.BRANCH,
        )
    return _build_info


def reset_build_info() -> None:
    """Forget the installed build stamp so the next read reloads settings."""
    global _build_info
    _build_info = None
    get_settings.cache_clear()
