"""
Dry-run automation engine.

Performs nothing on the host. Every call is recorded and answered with a
well-formed ActionResult shaped like a real engine's, which makes the server
usable without automation privileges and gives tests a deterministic engine.
"""

from ..models.actions import ActionOptions, OpenApplication, PrimaryAction
from ..models.contracts import (
    ActionResult,
    AppOpenResult,
    TraversalDiff,
    TraversalSnapshot,
)


class DryRunEngine:
    """
    Engine that records actions instead of performing them.

    Example:
        engine = DryRunEngine()
        result = engine.execute(OpenApplication(identifier="Calculator"), ActionOptions())
        engine.calls  # [(OpenApplication(...), ActionOptions(...))]
    """

    def __init__(self, open_pid: int = 0):
        """
        Args:
            open_pid: pid reported for applications "opened" by this engine
        """
        self.open_pid = open_pid
        self.calls: list[tuple[PrimaryAction, ActionOptions]] = []

    def execute(self, action: PrimaryAction, options: ActionOptions) -> ActionResult:
        self.calls.append((action, options))

        open_result = None
        pid = options.pid_for_traversal
        if isinstance(action, OpenApplication):
            open_result = AppOpenResult(
                pid=self.open_pid,
                app_name=action.identifier,
                processing_time_seconds="0.00",
            )
            if pid is None:
                pid = self.open_pid

        app_name = open_result.app_name if open_result else f"pid {pid}"
        before = self._snapshot(app_name) if options.traverse_before else None
        after = self._snapshot(app_name) if options.traverse_after else None
        diff = TraversalDiff() if options.show_diff and before and after else None

        return ActionResult(
            open_result=open_result,
            traversal_pid=pid,
            traversal_before=before,
            traversal_after=after,
            traversal_diff=diff,
        )

    @staticmethod
    def _snapshot(app_name: str) -> TraversalSnapshot:
        return TraversalSnapshot(
            app_name=app_name,
            elements=[],
            stats={"count": 0},
            processing_time_seconds="0.00",
        )
