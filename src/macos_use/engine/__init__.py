"""
Automation engines and engine loading.
"""

import importlib

from ..exceptions import ConfigurationError
from .base import AutomationEngine
from .dry_run import DryRunEngine


def load_engine(path: str) -> AutomationEngine:
    """
    Resolve an engine from an import path.

    Args:
        path: "package.module:attribute"; empty selects DryRunEngine. A class
            or factory attribute is called with no arguments.

    Returns:
        Engine instance

    Raises:
        ConfigurationError: If the path cannot be imported or resolved to an engine
    """
    if not path:
        return DryRunEngine()

    module_name, sep, attribute = path.partition(":")
    if not sep or not module_name or not attribute:
        raise ConfigurationError(
            "engine must look like 'package.module:attribute'", field="engine", value=path
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(
            f"cannot import engine module '{module_name}': {e}", field="engine", value=path
        ) from e

    try:
        target = getattr(module, attribute)
    except AttributeError as e:
        raise ConfigurationError(
            f"module '{module_name}' has no attribute '{attribute}'", field="engine", value=path
        ) from e

    is_factory = isinstance(target, type) or (callable(target) and not hasattr(target, "execute"))
    engine = target() if is_factory else target
    if not isinstance(engine, AutomationEngine):
        raise ConfigurationError(
            f"'{path}' does not provide an execute(action, options) method",
            field="engine",
            value=path,
        )
    return engine


__all__ = [
    "AutomationEngine",
    "DryRunEngine",
    "load_engine",
]
