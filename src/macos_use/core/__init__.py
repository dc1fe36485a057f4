"""
Core components of the tool-call pipeline: extract, dispatch, act, articulate.
"""

from .act import ExecutionSerializer
from .articulate import ResultArticulator, has_error, parse_result, serialize_result
from .config import ServerConfig, get_config, reset_config
from .dispatch import ActionDispatcher, DispatchedCall
from .flags import parse_modifier_flags
from .options import build_options, normalize_options

__all__ = [
    "ActionDispatcher",
    "DispatchedCall",
    "ExecutionSerializer",
    "ResultArticulator",
    "has_error",
    "serialize_result",
    "parse_result",
    "parse_modifier_flags",
    "build_options",
    "normalize_options",
    "ServerConfig",
    "get_config",
    "reset_config",
]
