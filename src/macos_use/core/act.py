"""
Act Module: Execution Serializer

Funnels every validated action through one dedicated worker thread that
owns the automation engine. Submissions run strictly one at a time in
arrival order. There is no timeout and no cancellation: once submitted, an
action runs until the engine returns.
"""

import asyncio
from concurrent.futures import Future, ThreadPoolExecutor

from ..engine.base import AutomationEngine
from ..exceptions import EngineError
from ..models.actions import ActionOptions, PrimaryAction
from ..models.contracts import ActionResult
from ..utils.error_handler import ErrorHandler
from ..utils.logging import ComponentLogger, act_logger


class ExecutionSerializer:
    """
    Exclusive execution context for the automation engine.

    Example:
        serializer = ExecutionSerializer(DryRunEngine())

        # From synchronous code (blocks until the engine returns)
        result = serializer.execute(action, options)

        # From a coroutine (suspends without blocking the event loop)
        result = await serializer.execute_async(action, options)

        serializer.shutdown()
    """

    def __init__(self, engine: AutomationEngine, ops_logger: ComponentLogger = act_logger):
        """
        Args:
            engine: The engine this context owns; nothing else should call it
            ops_logger: Operation logger for executions
        """
        self.engine = engine
        self.ops_logger = ops_logger
        self._worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="automation-engine")
        # Only the worker thread writes this
        self.executions_completed = 0

    def submit(self, action: PrimaryAction, options: ActionOptions) -> "Future[ActionResult]":
        """
        Queue an action behind any already submitted.

        Returns:
            Future resolving to the engine's ActionResult, or raising EngineError
        """
        return self._worker.submit(self._perform, action, options)

    def execute(self, action: PrimaryAction, options: ActionOptions) -> ActionResult:
        """
        Run an action on the exclusive context and wait for it.

        Raises:
            EngineError: If the engine raised instead of returning a result
        """
        return self.submit(action, options).result()

    async def execute_async(self, action: PrimaryAction, options: ActionOptions) -> ActionResult:
        """
        Async version of execute() for the server's event loop.

        The await is shielded: if the awaiting task is cancelled the
        submitted action still runs to completion.

        Raises:
            EngineError: If the engine raised instead of returning a result
        """
        future = asyncio.wrap_future(self.submit(action, options))
        return await asyncio.shield(future)

    def _perform(self, action: PrimaryAction, options: ActionOptions) -> ActionResult:
        details = {"action_type": action.type, "pid": options.pid_for_traversal}
        self.ops_logger.log_operation_start("perform_action", details)

        try:
            with ErrorHandler.log_duration("perform_action", log_level="debug") as timing:
                result = self.engine.execute(action, options)
        except Exception as e:
            self.ops_logger.log_operation_error("perform_action", e, details)
            raise EngineError(f"{type(e).__name__}: {e}", phase="primary") from e

        if not isinstance(result, ActionResult):
            error = EngineError(
                f"engine returned {type(result).__name__}, expected ActionResult", phase="primary"
            )
            self.ops_logger.log_operation_error("perform_action", error, details)
            raise error

        self.executions_completed += 1
        self.ops_logger.log_operation_complete(
            "perform_action", duration_ms=timing["duration_ms"], details=details
        )
        self.ops_logger.log_metric("executions_completed", self.executions_completed)
        return result

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; with wait=True, finish everything already queued."""
        self._worker.shutdown(wait=wait)

    def __enter__(self) -> "ExecutionSerializer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()
