"""
Pydantic models defining the engine result and tool-call response contracts.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ============================================================================
# Engine result contracts
# ============================================================================


class _WireModel(BaseModel):
    """Base for models rendered to clients: camelCase keys, immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AppOpenResult(_WireModel):
    """Outcome of opening or activating an application."""

    pid: int
    app_name: str
    processing_time_seconds: str | None = None


class ElementData(_WireModel):
    """One element captured by a traversal."""

    role: str
    text: str | None = None
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None


class TraversalSnapshot(_WireModel):
    """State of the target application at one point in time."""

    app_name: str
    elements: list[ElementData] = Field(default_factory=list)
    stats: dict[str, int] = Field(default_factory=dict)
    processing_time_seconds: str | None = None


class TraversalDiff(_WireModel):
    """Elements that appeared or disappeared between two traversals."""

    added: list[ElementData] = Field(default_factory=list)
    removed: list[ElementData] = Field(default_factory=list)


class ActionResult(_WireModel):
    """
    Aggregated engine outcome for one call.

    Each phase (primary action, before-traversal, after-traversal) reports
    either its payload or an error string; engine errors are recorded here,
    never raised.
    """

    open_result: AppOpenResult | None = None
    traversal_pid: int | None = None
    traversal_before: TraversalSnapshot | None = None
    traversal_after: TraversalSnapshot | None = None
    traversal_diff: TraversalDiff | None = None
    primary_action_error: str | None = None
    traversal_before_error: str | None = None
    traversal_after_error: str | None = None


# ============================================================================
# Tool-call response
# ============================================================================


class ToolCallResponse(BaseModel):
    """Transport-neutral response for one tool call."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Rendered payload: serialized ActionResult or error message")
    is_error: bool = Field(default=False, description="True when any requested phase failed")
    metadata: dict[str, Any] = Field(default_factory=dict)
