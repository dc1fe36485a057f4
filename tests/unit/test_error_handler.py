"""
Unit tests for error handling and logging utilities.
"""

import logging
import time

import pytest
import structlog

from macos_use.core.config import ServerConfig
from macos_use.exceptions import DispatchError
from macos_use.utils.error_handler import ErrorHandler
from macos_use.utils.logging import ComponentLogger, call_context, setup_logging


class TestErrorHandler:
    """Tests for ErrorHandler."""

    def test_log_duration_records_timing(self):
        with ErrorHandler.log_duration("sleep", log_level="debug") as timing:
            time.sleep(0.01)
        assert timing["duration_ms"] >= 10

    def test_log_duration_records_timing_on_error(self):
        with pytest.raises(RuntimeError):
            with ErrorHandler.log_duration("explode") as timing:
                raise RuntimeError("boom")
        assert "duration_ms" in timing

    def test_describe_own_error(self):
        data = ErrorHandler.describe(DispatchError("nope"))
        assert data["error_type"] == "DispatchError"
        assert data["user_message"] == "Method not found: nope"

    def test_describe_foreign_error(self):
        assert ErrorHandler.describe(KeyError("k")) == {"error_type": "KeyError", "message": "'k'"}


class TestLogging:
    """Tests for logging setup."""

    @pytest.fixture(autouse=True)
    def restore_structlog(self):
        yield
        structlog.reset_defaults()

    def test_component_logger_events(self):
        logger = ComponentLogger("act")
        with structlog.testing.capture_logs() as logs:
            logger.log_operation_start("perform_action", {"pid": 1})
            logger.log_operation_complete("perform_action", duration_ms=3.0)
            logger.log_operation_error("perform_action", ValueError("bad"))

        assert [entry["event"] for entry in logs] == [
            "perform_action_started",
            "perform_action_completed",
            "perform_action_failed",
        ]
        assert logs[0]["pid"] == 1
        assert logs[1]["duration_ms"] == 3.0
        assert logs[2]["error_type"] == "ValueError"
        assert logs[2]["log_level"] == "error"

    def test_logs_go_to_stderr(self, capsys):
        setup_logging(ServerConfig())

        structlog.get_logger("test").info("hello_stderr")

        captured = capsys.readouterr()
        assert "hello_stderr" not in captured.out
        assert "hello_stderr" in captured.err

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "server.log"
        root = logging.getLogger()
        before = list(root.handlers)
        try:
            setup_logging(ServerConfig(log_file=log_file))
            structlog.get_logger("test").info("to_file", answer=42)
            for handler in root.handlers:
                handler.flush()
        finally:
            for handler in root.handlers[len(before):]:
                root.removeHandler(handler)
                handler.close()

        assert '"to_file"' in log_file.read_text()

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "server.log"
        root = logging.getLogger()
        before = list(root.handlers)
        try:
            setup_logging(ServerConfig(log_file=log_file))
            setup_logging(ServerConfig(log_file=log_file))
            assert len(root.handlers) == len(before) + 2

            structlog.get_logger("test").info("logged_once")
            for handler in root.handlers:
                handler.flush()
        finally:
            for handler in root.handlers[len(before):]:
                root.removeHandler(handler)
                handler.close()

        assert log_file.read_text().count('"logged_once"') == 1

    def test_console_setting_overrides_global_config(self, capsys):
        ComponentLogger("act", enable_rich_console=True).log_operation_start("loud_op")
        ComponentLogger("act", enable_rich_console=False).log_operation_start("quiet_op")

        err = capsys.readouterr().err
        assert "Starting: loud_op" in err
        assert "Starting: quiet_op" not in err

    def test_with_console_keeps_component(self):
        logger = ComponentLogger("server").with_console(False)
        assert logger.component == "server"
        assert logger.rich_enabled is False

    def test_call_context_binds_call_id_and_tool(self):
        with call_context("macos-use_refresh_traversal") as first:
            bound = structlog.contextvars.get_contextvars()
        with call_context("macos-use_refresh_traversal") as second:
            pass

        assert second == first + 1
        assert bound == {"call_id": first, "tool": "macos-use_refresh_traversal"}
        assert "call_id" not in structlog.contextvars.get_contextvars()
