"""Centralized error handling utilities"""
import time
from contextlib import contextmanager
from typing import Any, Iterator

from ..exceptions import MacosUseError
from ..utils.logging import get_logger

logger = get_logger(__name__)


class ErrorHandler:
    """Centralized error handling with logging"""

    @staticmethod
    @contextmanager
    def log_duration(operation_name: str, log_level: str = "info") -> Iterator[dict[str, Any]]:
        """
        Context manager to log operation duration.

        Yields a dict that receives `duration_ms` once the block exits, so
        callers can report the timing themselves.

        Example:
            with ErrorHandler.log_duration("perform_action") as timing:
                result = engine.execute(action, options)
            print(timing["duration_ms"])
        """
        timing: dict[str, Any] = {}
        start = time.perf_counter()
        try:
            getattr(logger, log_level)(f"Starting {operation_name}")
            yield timing
        finally:
            duration = time.perf_counter() - start
            timing["duration_ms"] = duration * 1000
            getattr(logger, log_level)(f"{operation_name} completed in {duration:.3f}s")

    @staticmethod
    def describe(error: BaseException) -> dict[str, Any]:
        """
        Structured description of an error for logging.

        Args:
            error: Any exception

        Returns:
            MacosUseError.to_dict() for our own errors, type and message otherwise
        """
        if isinstance(error, MacosUseError):
            return error.to_dict()
        return {"error_type": type(error).__name__, "message": str(error)}
