"""
Action Dispatcher

Maps a tool name plus its arguments to exactly one PrimaryAction and the
ActionOptions it runs with. The mapping is a static table; each row names
the tool, whether it needs a target pid, the fields it requires and how to
build its action.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from ..exceptions import DispatchError, ParameterError
from ..models.actions import (
    ActionOptions,
    Click,
    Input,
    OpenApplication,
    PressKey,
    PrimaryAction,
    TraverseOnly,
    TypeText,
)
from ..models.enums import ParameterErrorKind
from ..models.result import Result
from ..models.value import ArgumentsMap
from ..utils.logging import get_logger
from .extract import optional_pid, required_double, required_string
from .flags import parse_modifier_flags
from .options import DEFAULT_MAX_DURATION_SECONDS, build_options, reaffirm_pid

logger = get_logger(__name__)

ActionBuilder = Callable[[ArgumentsMap], Result[PrimaryAction]]


def _build_open(args: ArgumentsMap) -> Result[PrimaryAction]:
    return Result.ok(OpenApplication(identifier=required_string(args, "identifier")))


def _build_click(args: ArgumentsMap) -> Result[PrimaryAction]:
    x = required_double(args, "x")
    y = required_double(args, "y")
    return Result.ok(Input(action=Click(x=x, y=y)))


def _build_type(args: ArgumentsMap) -> Result[PrimaryAction]:
    return Result.ok(Input(action=TypeText(text=required_string(args, "text"))))


def _build_press(args: ArgumentsMap) -> Result[PrimaryAction]:
    key_name = required_string(args, "keyName")
    flags = parse_modifier_flags(args.get("modifierFlags"))
    return flags.map(lambda parsed: Input(action=PressKey(key_name=key_name, flags=parsed)))


def _build_refresh(args: ArgumentsMap) -> Result[PrimaryAction]:
    return Result.ok(TraverseOnly())


@dataclass(frozen=True)
class ToolSpec:
    """One row of the dispatch table."""

    suffix: str
    alias: str
    label: str
    requires_pid: bool
    required_fields: tuple[str, ...]
    build: ActionBuilder


TOOL_TABLE: tuple[ToolSpec, ...] = (
    ToolSpec(
        suffix="open_application_and_traverse",
        alias="open-and-traverse",
        label="open application",
        requires_pid=False,
        required_fields=("identifier",),
        build=_build_open,
    ),
    ToolSpec(
        suffix="click_and_traverse",
        alias="click-and-traverse",
        label="click",
        requires_pid=True,
        required_fields=("pid", "x", "y"),
        build=_build_click,
    ),
    ToolSpec(
        suffix="type_and_traverse",
        alias="type-and-traverse",
        label="type",
        requires_pid=True,
        required_fields=("pid", "text"),
        build=_build_type,
    ),
    ToolSpec(
        suffix="press_key_and_traverse",
        alias="press-key-and-traverse",
        label="press key",
        requires_pid=True,
        required_fields=("pid", "keyName"),
        build=_build_press,
    ),
    ToolSpec(
        suffix="refresh_traversal",
        alias="refresh-traversal",
        label="refresh",
        requires_pid=True,
        required_fields=("pid",),
        build=_build_refresh,
    ),
)


@dataclass(frozen=True)
class DispatchedCall:
    """A validated call, ready for the execution serializer."""

    tool: str
    action: PrimaryAction
    options: ActionOptions
    warnings: list[str] = field(default_factory=list)


class ActionDispatcher:
    """
    Resolves tool calls against the dispatch table.

    Example:
        dispatcher = ActionDispatcher(prefix="macos-use_")
        call = dispatcher.dispatch(
            "macos-use_click_and_traverse",
            arguments_from_json({"pid": 501, "x": 10.5, "y": 20}),
        )
        call.action  # Input(action=Click(x=10.5, y=20.0))
    """

    def __init__(
        self,
        prefix: str = "macos-use_",
        defaults: ActionOptions | None = None,
        max_duration: float | None = DEFAULT_MAX_DURATION_SECONDS,
    ):
        self.prefix = prefix
        self.defaults = defaults or ActionOptions()
        self.max_duration = max_duration

        self._by_name: dict[str, ToolSpec] = {}
        self._aliases: dict[str, str] = {}
        for spec in TOOL_TABLE:
            name = self.canonical_name(spec)
            self._by_name[name] = spec
            self._aliases[spec.alias] = name

    def canonical_name(self, spec: ToolSpec) -> str:
        return f"{self.prefix}{spec.suffix}"

    def tool_names(self) -> list[str]:
        """Canonical tool names in table order."""
        return list(self._by_name)

    def resolve(self, tool_name: str) -> tuple[str, ToolSpec]:
        """
        Look up a tool by canonical name or short alias.

        Raises:
            DispatchError: If the name is in neither table
        """
        name = self._aliases.get(tool_name, tool_name)
        spec = self._by_name.get(name)
        if spec is None:
            logger.error("unknown_tool", tool=tool_name)
            raise DispatchError(tool_name)
        return name, spec

    def dispatch(self, tool_name: str, args: ArgumentsMap) -> DispatchedCall:
        """
        Turn one tool call into a PrimaryAction and its ActionOptions.

        Steps:
        1. Resolve the tool name
        2. Extract the optional pid
        3. Fail on a missing pid for pid-bearing tools, before any other field
        4. Build and normalize options
        5. Extract tool fields and build the action
        6. Re-affirm the options' pid to the tool-required one

        Raises:
            DispatchError: Unknown tool
            ParameterError: Missing, mistyped or out-of-range arguments
        """
        name, spec = self.resolve(tool_name)

        pid = optional_pid(args, "pid")
        if spec.requires_pid and pid is None:
            raise ParameterError(
                f"Missing required 'pid' for {spec.label} tool",
                kind=ParameterErrorKind.MISSING_REQUIRED,
                field="pid",
            )

        options = build_options(args, pid, self.defaults, max_duration=self.max_duration)

        built = spec.build(args)
        action = built.unwrap()
        if spec.requires_pid:
            options = reaffirm_pid(options, pid)

        logger.info(
            "constructed_primary_action",
            tool=name,
            action=action.model_dump(mode="json"),
            pid=options.pid_for_traversal,
        )
        return DispatchedCall(tool=name, action=action, options=options, warnings=list(built.warnings))
