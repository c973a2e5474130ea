"""Tests for logging_utils processors and configuration."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock

import pytest
import structlog

from traced_errors import new, new_t, wrap
from traced_errors.logging_utils import (
    SOURCE_LOCATION_FIELD,
    SPAN_ID_FIELD,
    TRACE_FIELD,
    add_error_diagnostics,
    configure_logging,
    create_logger,
)


@pytest.fixture
def reset_structlog() -> Generator[None, None, None]:
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


class TestAddErrorDiagnostics:
    """Tests for the add_error_diagnostics processor."""

    def test_adds_fields_for_traced_error(self, mock_span: MagicMock) -> None:
        # Arrange
        err = new_t(mock_span, "payment declined")
        event_dict: dict[str, Any] = {"event": "charge failed", "error": err}

        # Act
        result = add_error_diagnostics(None, "", event_dict)

        # Assert
        assert result[TRACE_FIELD] == "abcdef123456789012345678abcdef12"
        assert result[SPAN_ID_FIELD] == "1234567890abcdef"
        source_location = result[SOURCE_LOCATION_FIELD]
        assert source_location["function"] == (
            f"{__name__}.TestAddErrorDiagnostics.test_adds_fields_for_traced_error"
        )
        assert isinstance(source_location["line"], int)

    def test_omits_trace_fields_without_span(self) -> None:
        # Arrange
        event_dict: dict[str, Any] = {"event": "failed", "error": new("a")}

        # Act
        result = add_error_diagnostics(None, "", event_dict)

        # Assert
        assert SOURCE_LOCATION_FIELD in result
        assert TRACE_FIELD not in result
        assert SPAN_ID_FIELD not in result

    def test_reads_exception_from_exc_info(self) -> None:
        # Arrange
        err = new("a")
        event_dict: dict[str, Any] = {"event": "failed", "exc_info": err}

        # Act
        result = add_error_diagnostics(None, "", event_dict)

        # Assert
        assert SOURCE_LOCATION_FIELD in result

    def test_reads_exc_info_true_inside_except_block(self) -> None:
        # Arrange
        event_dict: dict[str, Any] = {"event": "failed", "exc_info": True}

        # Act
        try:
            raise new("a")
        except Exception:
            result = add_error_diagnostics(None, "", event_dict)

        # Assert
        assert SOURCE_LOCATION_FIELD in result
        assert result["exc_info"] is True

    def test_reads_exc_info_tuple(self) -> None:
        # Arrange
        err = wrap(ValueError("a"), "b")
        event_dict: dict[str, Any] = {
            "event": "failed",
            "exc_info": (type(err), err, None),
        }

        # Act
        result = add_error_diagnostics(None, "", event_dict)

        # Assert
        assert SOURCE_LOCATION_FIELD in result

    def test_finds_decorated_error_behind_plain_exception(self) -> None:
        # Arrange
        decorated = new("a")
        try:
            raise RuntimeError("handler failed") from decorated
        except RuntimeError as e:
            event_dict: dict[str, Any] = {"event": "failed", "error": e}

        # Act
        result = add_error_diagnostics(None, "", event_dict)

        # Assert
        assert SOURCE_LOCATION_FIELD in result

    def test_plain_exception_is_left_untouched(self) -> None:
        # Arrange
        event_dict: dict[str, Any] = {"event": "failed", "error": ValueError("a")}

        # Act
        result = add_error_diagnostics(None, "", event_dict)

        # Assert
        assert result == {"event": "failed", "error": event_dict["error"]}

    def test_event_without_error_is_left_untouched(self) -> None:
        event_dict: dict[str, Any] = {"event": "hello", "error": "not an exception"}
        assert add_error_diagnostics(None, "", event_dict) == {
            "event": "hello",
            "error": "not an exception",
        }


@pytest.mark.usefixtures("reset_structlog")
class TestConfigureLogging:
    """Tests for configure_logging output."""

    def test_json_output_carries_error_diagnostics(
        self, mock_span: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        # Arrange
        configure_logging("test-service", use_json=True)
        logger = create_logger("worker")
        err = new_t(mock_span, "error")

        # Act
        logger.error("work failed", error=err)

        # Assert
        output_lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
        payload = json.loads(output_lines[-1])
        assert payload["event"] == "work failed"
        assert payload["logger_name"] == "worker"
        assert payload["service.name"] == "test-service"
        assert payload[TRACE_FIELD] == "abcdef123456789012345678abcdef12"
        assert payload[SPAN_ID_FIELD] == "1234567890abcdef"
        assert payload[SOURCE_LOCATION_FIELD]["function"].endswith(
            "test_json_output_carries_error_diagnostics"
        )

    def test_console_output_is_plain_text(self, capsys: pytest.CaptureFixture[str]) -> None:
        # Arrange
        configure_logging("test-service", use_json=False)

        # Act
        create_logger().info("hello")

        # Assert
        assert "hello" in capsys.readouterr().out

    def test_log_format_env_selects_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        # Arrange
        monkeypatch.setenv("LOG_FORMAT", "json")
        configure_logging("test-service")

        # Act
        create_logger().info("hello", answer=42)

        # Assert
        output_lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
        payload = json.loads(output_lines[-1])
        assert payload["answer"] == 42
        assert payload["level"] == "info"

    def test_stdout_handler_is_installed(self) -> None:
        # Act
        configure_logging("test-service", log_level="debug", use_json=True)

        # Assert
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(
            isinstance(handler, logging.StreamHandler) and handler.stream is sys.stdout
            for handler in root.handlers
        )
