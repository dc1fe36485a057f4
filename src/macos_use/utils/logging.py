"""
Structured logging for the macos-use tool server.

Everything goes to stderr: stdout carries the MCP stdio transport, so a
single stray log line there would corrupt the protocol stream.

Every record carries the contextvars bound by `call_context`, so all lines
logged while handling one tool call share its `call_id` and `tool`.
"""

import itertools
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from rich.console import Console
from rich.markup import escape

from ..models.enums import LogLevel

if TYPE_CHECKING:
    from ..core.config import ServerConfig

_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.TimeStamper(fmt="iso"),
]

_call_ids = itertools.count(1)

# Root handlers installed by the last setup_logging call
_installed_handlers: list[logging.Handler] = []


def setup_file_logging(
    log_file: Path, max_bytes: int = 10 * 1024 * 1024, backup_count: int = 5  # 10MB
) -> RotatingFileHandler:
    """
    Rotating handler that writes one JSON object per record.

    Args:
        log_file: Path to the log file (its directory must already exist,
            see ServerConfig.ensure_log_directory)
        max_bytes: Size that triggers rotation (default: 10MB)
        backup_count: Rotated files to keep (default: 5)
    """
    handler = RotatingFileHandler(
        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        )
    )
    return handler


def _console_renderer(level: LogLevel):
    # DEBUG sessions are usually piped into tooling, so they get JSON
    if level == LogLevel.DEBUG:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def _remove_installed_handlers() -> None:
    root_logger = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()


def setup_logging(config: "ServerConfig | None" = None) -> None:
    """
    Configure structlog for the server process.

    Without a log file, records are rendered straight to stderr. With one,
    they go through the stdlib root logger to both the rotating JSON file
    and a stderr handler.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        config: Settings to use (global config when omitted)
    """
    if config is None:
        from ..core.config import get_config

        config = get_config()

    _remove_installed_handlers()
    level = getattr(logging, config.log_level.value, logging.INFO)
    renderer = _console_renderer(config.log_level)

    if config.log_file is None:
        logger_factory: Any = structlog.PrintLoggerFactory(file=sys.stderr)
        processors = _SHARED_PROCESSORS + [renderer]
    else:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            )
        )
        file_handler = setup_file_logging(
            config.log_file, config.log_max_bytes, config.log_backup_count
        )
        root_logger = logging.getLogger()
        for handler in (file_handler, stderr_handler):
            root_logger.addHandler(handler)
            _installed_handlers.append(handler)
        root_logger.setLevel(level)

        logger_factory = structlog.stdlib.LoggerFactory()
        processors = _SHARED_PROCESSORS + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Structured logger for a module (typically `__name__`)."""
    return structlog.get_logger(name)


@contextmanager
def call_context(tool: str) -> Iterator[int]:
    """
    Bind a fresh call id and the tool name to every record logged inside.

    The engine runs on its own worker thread and does not inherit these
    bindings.

    Example:
        with call_context("macos-use_click_and_traverse") as call_id:
            logger.info("dispatching")  # carries call_id and tool
    """
    call_id = next(_call_ids)
    with structlog.contextvars.bound_contextvars(call_id=call_id, tool=tool):
        yield call_id


class ComponentLogger:
    """
    Operation-level logging for one pipeline stage.

    Each event is logged through structlog and, when the rich console is
    enabled, echoed to stderr as a one-line marker. With enable_rich_console
    left as None the global config decides.
    """

    def __init__(self, component_name: str, enable_rich_console: bool | None = None):
        self.component = component_name
        self.enable_rich_console = enable_rich_console
        self.logger = structlog.get_logger(component_name)
        self.console = Console(stderr=True)

    def with_console(self, enabled: bool) -> "ComponentLogger":
        """Same component, with the marker echo fixed on or off."""
        return ComponentLogger(self.component, enable_rich_console=enabled)

    @property
    def rich_enabled(self) -> bool:
        if self.enable_rich_console is not None:
            return self.enable_rich_console

        from ..core.config import get_config

        return get_config().enable_rich_console

    def _echo(self, marker: str, text: str) -> None:
        if self.rich_enabled:
            self.console.print(f"{marker} \\[{self.component}] {escape(text)}")

    def log_operation_start(self, operation: str, details: dict | None = None):
        self._echo("[cyan]▶[/cyan]", f"Starting: {operation}")
        self.logger.info(f"{operation}_started", component=self.component, **(details or {}))

    def log_operation_complete(
        self, operation: str, duration_ms: float | None = None, details: dict | None = None
    ):
        suffix = f" ({duration_ms:.0f}ms)" if duration_ms is not None else ""
        self._echo("[green]✓[/green]", f"Completed: {operation}{suffix}")

        fields = dict(details or {}, component=self.component)
        if duration_ms is not None:
            fields["duration_ms"] = duration_ms
        self.logger.info(f"{operation}_completed", **fields)

    def log_operation_error(self, operation: str, error: Exception, details: dict | None = None):
        self._echo("[red]✗[/red]", f"Failed: {operation}: {error}")
        self.logger.error(
            f"{operation}_failed",
            component=self.component,
            error_type=type(error).__name__,
            error_message=str(error),
            **(details or {}),
        )

    def log_metric(self, metric_name: str, value: Any, unit: str = ""):
        self.logger.info(
            "metric", component=self.component, metric=metric_name, value=value, unit=unit
        )


act_logger = ComponentLogger("act")
articulate_logger = ComponentLogger("articulate")
server_logger = ComponentLogger("server")
