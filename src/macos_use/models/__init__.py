"""
Data models for the macos-use tool server.
"""

from .actions import (
    ActionOptions,
    Click,
    Input,
    ModifierFlag,
    OpenApplication,
    PressKey,
    PrimaryAction,
    TraverseOnly,
    TypeText,
)
from .contracts import (
    ActionResult,
    AppOpenResult,
    ElementData,
    ToolCallResponse,
    TraversalDiff,
    TraversalSnapshot,
)
from .enums import LogLevel, ParameterErrorKind, ValueKind
from .result import Result
from .value import ArgumentsMap, Value, arguments_from_json

__all__ = [
    "ActionOptions",
    "PrimaryAction",
    "OpenApplication",
    "Input",
    "TraverseOnly",
    "Click",
    "TypeText",
    "PressKey",
    "ModifierFlag",
    "ActionResult",
    "AppOpenResult",
    "ElementData",
    "TraversalSnapshot",
    "TraversalDiff",
    "ToolCallResponse",
    "LogLevel",
    "ParameterErrorKind",
    "ValueKind",
    "Result",
    "Value",
    "ArgumentsMap",
    "arguments_from_json",
]
