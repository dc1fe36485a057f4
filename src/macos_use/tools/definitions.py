"""
Tool declarations advertised to MCP clients.

These describe the tools for capability listing. Tool order and required
parameters come from the dispatch table; argument validation itself is
done by the dispatcher, not by these schemas.
"""

from typing import Any, Literal, Optional

from mcp.types import Tool
from pydantic import BaseModel, ConfigDict, Field

from ..core.dispatch import TOOL_TABLE


class ToolParameter(BaseModel):
    """Schema for a single tool parameter definition."""

    name: str = Field(..., description="Parameter name")
    type: Literal["string", "number", "boolean", "array"] = Field(..., description="JSON type")
    description: str = Field(..., description="Parameter description for the client")
    required: bool = Field(default=True, description="Whether parameter is required")
    items_type: Optional[str] = Field(default=None, description="Element type for arrays")


class ToolDefinition(BaseModel):
    """
    Schema for one advertised tool.
    Converts to an MCP Tool with a JSON-schema input description.
    """

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "macos-use_refresh_traversal",
            "description": "Traverses the accessibility tree of the application specified by PID.",
            "parameters": [
                {
                    "name": "pid",
                    "type": "number",
                    "description": "REQUIRED. PID of the application to traverse.",
                    "required": True
                }
            ]
        }
    })

    name: str = Field(..., description="Unique tool identifier")
    description: str = Field(..., description="What the tool does")
    parameters: list[ToolParameter] = Field(default_factory=list)

    def to_input_schema(self) -> dict[str, Any]:
        """JSON schema of the tool's arguments object."""
        properties: dict[str, Any] = {}
        for param in self.parameters:
            prop: dict[str, Any] = {"type": param.type, "description": param.description}
            if param.items_type:
                prop["items"] = {"type": param.items_type}
            properties[param.name] = prop
        return {
            "type": "object",
            "properties": properties,
            "required": [p.name for p in self.parameters if p.required],
        }

    def to_mcp_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.to_input_schema())


def _param(name: str, json_type: str, description: str, **kwargs: Any) -> ToolParameter:
    # Required-ness is filled in from the dispatch table
    return ToolParameter(name=name, type=json_type, description=description, required=False, **kwargs)


def _pid(description: str = "REQUIRED. PID of the target application window.") -> ToolParameter:
    return _param("pid", "number", description)


# Optional ActionOptions overrides accepted by every tool
OPTION_PARAMETERS: tuple[ToolParameter, ...] = (
    _param("traverseBefore", "boolean",
           "OPTIONAL. Traverse the accessibility tree before the action."),
    _param("traverseAfter", "boolean",
           "OPTIONAL. Traverse the accessibility tree after the action."),
    _param("showDiff", "boolean",
           "OPTIONAL. Report the difference between the two traversals."),
    _param("onlyVisibleElements", "boolean",
           "OPTIONAL. Only include elements that are visible on screen."),
    _param("showAnimation", "boolean", "OPTIONAL. Visualize the input action on screen."),
    _param("animationDuration", "number", "OPTIONAL. Duration of the visualization in seconds."),
    _param("delayAfterAction", "number",
           "OPTIONAL. Seconds to wait after the action before traversing."),
)

# Description and tool-specific parameters, keyed by dispatch-table suffix
TOOL_DOCS: dict[str, tuple[str, tuple[ToolParameter, ...]]] = {
    "open_application_and_traverse": (
        "Opens/activates an application and then traverses its accessibility tree.",
        (_param("identifier", "string", "REQUIRED. App name, path, or bundle ID."),),
    ),
    "click_and_traverse": (
        "Simulates a click at the given coordinates within the app specified by PID, "
        "then traverses its accessibility tree.",
        (
            _pid(),
            _param("x", "number", "REQUIRED. X coordinate for the click."),
            _param("y", "number", "REQUIRED. Y coordinate for the click."),
        ),
    ),
    "type_and_traverse": (
        "Simulates typing text into the app specified by PID, "
        "then traverses its accessibility tree.",
        (_pid(), _param("text", "string", "REQUIRED. Text to type.")),
    ),
    "press_key_and_traverse": (
        "Simulates pressing a specific key (like Return, Enter, Escape, Tab, Arrow Keys, "
        "regular characters) with optional modifiers, then traverses the accessibility tree.",
        (
            _pid(),
            _param(
                "keyName", "string",
                "REQUIRED. Name of the key to press (e.g., 'Return', 'Enter', 'Escape', "
                "'Tab', 'ArrowUp', 'Delete', 'a', 'B'). Case-sensitive for letter keys "
                "if no modifiers used.",
            ),
            _param(
                "modifierFlags", "array",
                "OPTIONAL. Modifier keys to hold (e.g., ['Command', 'Shift']). Valid: "
                "CapsLock, Shift, Control, Option, Command, Function, NumericPad, Help.",
                items_type="string",
            ),
        ),
    ),
    "refresh_traversal": (
        "Traverses the accessibility tree of the application specified by PID.",
        (_pid("REQUIRED. PID of the application to traverse."),),
    ),
}


def build_tool_definitions(prefix: str = "macos-use_") -> list[ToolDefinition]:
    """
    Declarations for every dispatchable tool, in dispatch-table order.

    A parameter is advertised as required exactly when its table row lists
    it in required_fields.

    Args:
        prefix: Tool name prefix (must match the dispatcher's)

    Raises:
        KeyError: If a table row has no declaration, or lists a required
            field that its declaration does not describe
    """
    tools = []
    for spec in TOOL_TABLE:
        description, own_parameters = TOOL_DOCS[spec.suffix]
        declared = {param.name for param in own_parameters}
        undeclared = set(spec.required_fields) - declared
        if undeclared:
            raise KeyError(f"{spec.suffix}: no declaration for {sorted(undeclared)}")

        parameters = [
            param.model_copy(update={"required": param.name in spec.required_fields})
            for param in own_parameters
        ]
        parameters.extend(OPTION_PARAMETERS)
        tools.append(
            ToolDefinition(name=f"{prefix}{spec.suffix}", description=description, parameters=parameters)
        )
    return tools
