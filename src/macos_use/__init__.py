"""
macos-use - MCP tool server for macOS UI automation
Validates tool calls, runs them one at a time on an automation engine,
and returns the outcome as canonical JSON.
"""

# Setup rich logging and tracebacks globally
from .utils.rich_logging import setup_rich_logging
setup_rich_logging()

from .core.config import ServerConfig
from .engine import AutomationEngine, DryRunEngine
from .models.contracts import ActionResult, ToolCallResponse
from .server import MacosUseServer

__version__ = "0.1.0"

__all__ = [
    "MacosUseServer",
    "ServerConfig",
    "AutomationEngine",
    "DryRunEngine",
    "ActionResult",
    "ToolCallResponse",
]
