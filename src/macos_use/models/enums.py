"""Enums shared across the tool-call pipeline.

Configuration choices, argument value tags and error categories live here so
every layer refers to the same names.
"""

from enum import Enum


class LogLevel(str, Enum):
    """Standard logging levels.

    Attributes:
        DEBUG: Detailed diagnostic information (argument coercions, raw arguments)
        INFO: One line per tool call and per engine execution
        WARNING: Soft failures such as unknown modifier flags
        ERROR: Rejected calls and engine failures
        CRITICAL: Server could not start
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class ValueKind(str, Enum):
    """Tags of the loosely-typed argument value variant."""
    NULL = "null"
    BOOL = "bool"
    INT = "int"
    DOUBLE = "double"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


class ParameterErrorKind(str, Enum):
    """Why a tool-call argument was rejected.

    Attributes:
        MISSING_REQUIRED: A required key is absent
        MISSING_OR_WRONG_TYPE: A required string is absent or not a string
        WRONG_TYPE: The value's tag does not fit the field
        NON_EXACT_INTEGER: A double with a fractional part was given for an integer field
        OUT_OF_RANGE: An integer does not fit the field's native width
        INVALID_OPTION: An option is outside the engine's accepted domain after merging
    """
    MISSING_REQUIRED = "missing_required"
    MISSING_OR_WRONG_TYPE = "missing_or_wrong_type"
    WRONG_TYPE = "wrong_type"
    NON_EXACT_INTEGER = "non_exact_integer"
    OUT_OF_RANGE = "out_of_range"
    INVALID_OPTION = "invalid_option"

    def __str__(self) -> str:
        return self.value


__all__ = [
    "LogLevel",
    "ValueKind",
    "ParameterErrorKind",
]
