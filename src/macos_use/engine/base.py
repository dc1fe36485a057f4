"""
Automation engine interface.

The engine performs the actual action and any before/after inspection. It
is consumed through one synchronous call and is never invoked concurrently:
the ExecutionSerializer owns it.
"""

from typing import Protocol, runtime_checkable

from ..models.actions import ActionOptions, PrimaryAction
from ..models.contracts import ActionResult


@runtime_checkable
class AutomationEngine(Protocol):
    """Anything with `execute(action, options) -> ActionResult`."""

    def execute(self, action: PrimaryAction, options: ActionOptions) -> ActionResult:
        """
        Perform one primary action with its traversal phases.

        Phase failures are reported in the returned ActionResult
        (primary_action_error, traversal_before_error, traversal_after_error),
        not raised.
        """
        ...
