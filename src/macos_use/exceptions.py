"""Exception classes with structured context for the tool-call pipeline"""

from datetime import datetime
from typing import Any

from .models.enums import ParameterErrorKind


class MacosUseError(Exception):
    """Base exception with context and metadata"""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        recoverable: bool = False,
        user_message: str | None = None,
    ):
        """
        Initialize exception with context.

        Args:
            message: Technical error message for logs
            details: Additional context (dict for structured logging)
            recoverable: Whether the server can keep serving after this error
            user_message: Message suitable for the tool-call response
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable
        self.user_message = user_message or message
        self.timestamp = datetime.now()

    def __str__(self) -> str:
        parts = [self.message]

        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({details_str})")

        if self.recoverable:
            parts.append("[recoverable]")

        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
            "user_message": self.user_message,
            "timestamp": self.timestamp.isoformat(),
        }


class ParameterError(MacosUseError):
    """A tool-call argument is missing, mistyped or outside its accepted range"""

    def __init__(
        self,
        message: str,
        kind: ParameterErrorKind,
        field: str | None = None,
        value: Any = None,
    ):
        details: dict[str, Any] = {"kind": kind.value}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value

        super().__init__(
            message=message,
            details=details,
            recoverable=True,
            user_message=message,
        )
        self.kind = kind
        self.field = field
        self.value = value


class DispatchError(MacosUseError):
    """Tool name is not in the dispatch table (method-not-found)"""

    def __init__(self, tool_name: str):
        super().__init__(
            message=f"Unknown tool: '{tool_name}'",
            details={"tool_name": tool_name},
            recoverable=True,
            user_message=f"Method not found: {tool_name}",
        )
        self.tool_name = tool_name


class EngineError(MacosUseError):
    """The automation engine raised instead of reporting an error in its result"""

    def __init__(self, message: str, phase: str = "primary", details: dict[str, Any] | None = None):
        details = details or {}
        details["phase"] = phase

        super().__init__(
            message=message,
            details=details,
            recoverable=True,
            user_message=f"Automation engine failed during {phase} phase: {message}",
        )
        self.phase = phase


class SerializationError(MacosUseError):
    """An ActionResult could not be rendered to its canonical text form"""

    def __init__(self, message: str, format: str = "json", details: dict[str, Any] | None = None):
        details = details or {}
        details["format"] = format

        super().__init__(
            message=message,
            details=details,
            recoverable=True,
            user_message="failed to serialize ActionResult to JSON",
        )
        self.format = format


class ConfigurationError(MacosUseError):
    """Configuration validation errors"""

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value

        super().__init__(
            message=message,
            details=details,
            recoverable=False,
            user_message=f"Configuration error: {message}",
        )
        self.field = field
        self.value = value
