"""
Options Builder

Builds the ActionOptions for one call: start from the configured defaults,
apply every override present in the arguments map, then normalize.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..exceptions import ParameterError
from ..models.actions import ActionOptions
from ..models.enums import ParameterErrorKind
from ..models.value import ArgumentsMap
from ..utils.logging import get_logger
from .extract import optional_bool, optional_double

logger = get_logger(__name__)

DEFAULT_MAX_DURATION_SECONDS: float | None = None


@dataclass(frozen=True)
class OptionOverride:
    """One overridable option: argument key, getter, ActionOptions field."""

    key: str
    extractor: Callable[[ArgumentsMap, str], Any]
    field: str


OPTION_OVERRIDES: tuple[OptionOverride, ...] = (
    OptionOverride("traverseBefore", optional_bool, "traverse_before"),
    OptionOverride("traverseAfter", optional_bool, "traverse_after"),
    OptionOverride("showDiff", optional_bool, "show_diff"),
    OptionOverride("onlyVisibleElements", optional_bool, "only_visible_elements"),
    OptionOverride("showAnimation", optional_bool, "show_animation"),
    OptionOverride("animationDuration", optional_double, "animation_duration"),
    OptionOverride("delayAfterAction", optional_double, "delay_after_action"),
)

_DURATION_FIELDS = {
    "animation_duration": "animationDuration",
    "delay_after_action": "delayAfterAction",
}


def apply_overrides(options: ActionOptions, args: ArgumentsMap) -> ActionOptions:
    """
    Replace each option whose key is present (and not null) in args.

    Raises:
        ParameterError: If an override has the wrong type
    """
    updates = {}
    for override in OPTION_OVERRIDES:
        value = override.extractor(args, override.key)
        if value is not None:
            updates[override.field] = value
    return options.model_copy(update=updates) if updates else options


def normalize_options(
    options: ActionOptions, max_duration: float | None = DEFAULT_MAX_DURATION_SECONDS
) -> ActionOptions:
    """
    Bring merged options into the engine's accepted domain.

    A diff needs both snapshots, so show_diff switches both traversals on.
    Durations must be finite and non-negative, and at most max_duration
    when a bound is configured.

    Raises:
        ParameterError: INVALID_OPTION for a duration outside that range
    """
    for field, key in _DURATION_FIELDS.items():
        seconds = getattr(options, field)
        too_long = max_duration is not None and seconds > max_duration
        if not math.isfinite(seconds) or seconds < 0 or too_long:
            upper = "inf" if max_duration is None else max_duration
            raise ParameterError(
                f"Invalid option '{key}': {seconds} is outside [0, {upper}] seconds",
                kind=ParameterErrorKind.INVALID_OPTION,
                field=key,
                value=seconds,
            )

    if options.show_diff and not (options.traverse_before and options.traverse_after):
        options = options.model_copy(update={"traverse_before": True, "traverse_after": True})
    return options


def build_options(
    args: ArgumentsMap,
    pid: int | None,
    defaults: ActionOptions | None = None,
    max_duration: float | None = DEFAULT_MAX_DURATION_SECONDS,
) -> ActionOptions:
    """
    Merge defaults with the call's overrides and normalize the result.

    Args:
        args: The call's arguments
        pid: Target process id already extracted from args (may be None)
        defaults: Starting record (ActionOptions() when omitted)
        max_duration: Upper bound for duration options (None: unbounded)

    Returns:
        Normalized ActionOptions targeting pid
    """
    options = (defaults or ActionOptions()).model_copy(update={"pid_for_traversal": pid})
    options = apply_overrides(options, args)
    options = normalize_options(options, max_duration=max_duration)
    logger.debug("constructed_action_options", **options.model_dump())
    return options


def reaffirm_pid(options: ActionOptions, pid: int) -> ActionOptions:
    """Return options whose target process is the tool-required pid."""
    if options.pid_for_traversal == pid:
        return options
    return options.model_copy(update={"pid_for_traversal": pid})
