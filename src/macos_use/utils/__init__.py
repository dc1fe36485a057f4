"""
Utility modules for the macos-use tool server.
"""

from .error_handler import ErrorHandler
from .logging import ComponentLogger, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "ComponentLogger",
    "ErrorHandler",
]
