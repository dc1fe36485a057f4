"""
Unit tests for the exception hierarchy.
"""

from macos_use.exceptions import (
    ConfigurationError,
    DispatchError,
    EngineError,
    MacosUseError,
    ParameterError,
    SerializationError,
)
from macos_use.models.enums import ParameterErrorKind


class TestMacosUseError:
    """Tests for the base exception."""

    def test_defaults(self):
        error = MacosUseError("something broke")

        assert error.message == "something broke"
        assert error.user_message == "something broke"
        assert error.details == {}
        assert error.recoverable is False
        assert str(error) == "something broke"

    def test_str_includes_details_and_recoverable(self):
        error = MacosUseError("bad", details={"field": "x"}, recoverable=True)
        assert str(error) == "bad (field=x) [recoverable]"

    def test_to_dict(self):
        data = MacosUseError("bad", details={"a": 1}).to_dict()

        assert data["error_type"] == "MacosUseError"
        assert data["message"] == "bad"
        assert data["details"] == {"a": 1}
        assert "timestamp" in data


class TestSubclasses:
    """Tests for the pipeline-specific errors."""

    def test_parameter_error(self):
        error = ParameterError(
            "PID value 9999999999 is out of range.",
            kind=ParameterErrorKind.OUT_OF_RANGE,
            field="pid",
            value=9999999999,
        )

        assert isinstance(error, MacosUseError)
        assert error.recoverable is True
        assert error.user_message == error.message
        assert error.details == {"kind": "out_of_range", "field": "pid", "value": 9999999999}

    def test_dispatch_error(self):
        error = DispatchError("nope")
        assert error.message == "Unknown tool: 'nope'"
        assert error.user_message == "Method not found: nope"
        assert error.recoverable is True

    def test_engine_error(self):
        error = EngineError("RuntimeError: boom", phase="primary")
        assert error.details["phase"] == "primary"
        assert "boom" in error.user_message

    def test_serialization_error(self):
        error = SerializationError("NaN in stats")
        assert error.details == {"format": "json"}
        assert error.user_message == "failed to serialize ActionResult to JSON"

    def test_configuration_error(self):
        error = ConfigurationError("bad engine", field="engine", value="x")
        assert error.recoverable is False
        assert error.user_message == "Configuration error: bad engine"
        assert error.details == {"field": "engine", "value": "x"}
