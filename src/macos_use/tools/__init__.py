"""
Tool declarations for capability advertisement.
"""

from .definitions import (
    OPTION_PARAMETERS,
    ToolDefinition,
    ToolParameter,
    build_tool_definitions,
)

__all__ = [
    "ToolParameter",
    "ToolDefinition",
    "OPTION_PARAMETERS",
    "build_tool_definitions",
]
