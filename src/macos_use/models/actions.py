"""
Pydantic models describing what a tool call asks the engine to do.

A call resolves to exactly one PrimaryAction plus one ActionOptions record.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Native process ids are signed 32-bit integers (pid_t)
PID_MIN = -(2**31)
PID_MAX = 2**31 - 1


class ModifierFlag(str, Enum):
    """Modifier keys that can be held during a key press.

    Values are the wire names; `mask` is the matching CoreGraphics event flag.
    """
    CAPS_LOCK = "capsLock"
    SHIFT = "shift"
    CONTROL = "control"
    OPTION = "option"
    COMMAND = "command"
    HELP = "help"
    FUNCTION = "function"
    NUMERIC_PAD = "numericPad"

    @property
    def mask(self) -> int:
        return _EVENT_FLAG_MASKS[self]

    def __str__(self) -> str:
        return self.value


_EVENT_FLAG_MASKS = {
    ModifierFlag.CAPS_LOCK: 0x0001_0000,
    ModifierFlag.SHIFT: 0x0002_0000,
    ModifierFlag.CONTROL: 0x0004_0000,
    ModifierFlag.OPTION: 0x0008_0000,
    ModifierFlag.COMMAND: 0x0010_0000,
    ModifierFlag.NUMERIC_PAD: 0x0020_0000,
    ModifierFlag.HELP: 0x0040_0000,
    ModifierFlag.FUNCTION: 0x0080_0000,
}


def combined_mask(flags: frozenset[ModifierFlag]) -> int:
    """Fold a flag set into a single CoreGraphics event-flags bitmask."""
    mask = 0
    for flag in flags:
        mask |= flag.mask
    return mask


class ActionOptions(BaseModel):
    """Execution-time configuration accompanying a PrimaryAction."""

    model_config = ConfigDict(frozen=True)

    pid_for_traversal: int | None = Field(
        default=None, ge=PID_MIN, le=PID_MAX, description="Target process for traversals"
    )
    traverse_before: bool = Field(default=False, description="Inspect the app before acting")
    traverse_after: bool = Field(default=False, description="Inspect the app after acting")
    show_diff: bool = Field(default=False, description="Report what changed between traversals")
    only_visible_elements: bool = Field(default=False, description="Skip off-screen elements")
    show_animation: bool = Field(default=True, description="Visualize the input action")
    animation_duration: float = Field(default=0.8, description="Seconds the visualization lasts")
    delay_after_action: float = Field(
        default=0.2, description="Seconds to wait before the after-traversal"
    )


# ============================================================================
# Input actions
# ============================================================================


class Click(BaseModel):
    """Mouse click at screen coordinates."""

    model_config = ConfigDict(frozen=True)

    type: Literal["click"] = "click"
    x: float
    y: float


class TypeText(BaseModel):
    """Type a string of text."""

    model_config = ConfigDict(frozen=True)

    type: Literal["type"] = "type"
    text: str


class PressKey(BaseModel):
    """Press a named key while holding modifier keys."""

    model_config = ConfigDict(frozen=True)

    type: Literal["press"] = "press"
    key_name: str
    flags: frozenset[ModifierFlag] = frozenset()

    @field_serializer("flags")
    def _sorted_flags(self, flags: frozenset[ModifierFlag]) -> list[str]:
        return sorted(flag.value for flag in flags)

    @property
    def flags_mask(self) -> int:
        return combined_mask(self.flags)


InputAction = Annotated[Union[Click, TypeText, PressKey], Field(discriminator="type")]


# ============================================================================
# Primary actions
# ============================================================================


class OpenApplication(BaseModel):
    """Open or activate an application by name, path or bundle id."""

    model_config = ConfigDict(frozen=True)

    type: Literal["open"] = "open"
    identifier: str


class Input(BaseModel):
    """Simulated user input against the target process."""

    model_config = ConfigDict(frozen=True)

    type: Literal["input"] = "input"
    action: InputAction


class TraverseOnly(BaseModel):
    """No input; only the traversal phases requested by the options run."""

    model_config = ConfigDict(frozen=True)

    type: Literal["traverse_only"] = "traverse_only"


PrimaryAction = Annotated[
    Union[OpenApplication, Input, TraverseOnly], Field(discriminator="type")
]
