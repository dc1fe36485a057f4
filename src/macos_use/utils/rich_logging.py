"""Console output with the Rich library"""

from typing import TYPE_CHECKING, Optional

import structlog
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme
from rich.traceback import install as install_rich_traceback

if TYPE_CHECKING:
    from ..core.config import ServerConfig
    from ..tools.definitions import ToolDefinition

MACOS_USE_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "tool": "blue",
        "param": "magenta",
    }
)


class MacosUseConsole:
    """Singleton stderr console with the server's theme"""

    _instance: Optional["MacosUseConsole"] = None

    def __new__(cls) -> "MacosUseConsole":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, "initialized"):
            # stdout belongs to the MCP transport
            self.console = Console(theme=MACOS_USE_THEME, stderr=True)
            self.initialized = True

    def print_banner(self, name: str, version: str):
        """Print startup banner"""
        self.console.print(
            Panel.fit(
                f"[bold cyan]{name}[/bold cyan] v{version}\n"
                "[dim]MCP tool server • open / click / type / press / traverse[/dim]",
                border_style="cyan",
            )
        )

    def print_config_summary(self, config: "ServerConfig"):
        """Print configuration summary table"""
        table = Table(title="Configuration", show_header=False, border_style="cyan")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="yellow")

        table.add_row("Server", f"{config.server_name} {config.server_version}")
        table.add_row("Engine", config.engine or "dry-run")
        table.add_row("Tool Prefix", config.tool_prefix)
        table.add_row("Log Level", config.log_level.value)
        table.add_row("Log File", str(config.log_file) if config.log_file else "disabled")

        defaults = config.default_options()
        table.add_row(
            "Default Traversal",
            f"before={defaults.traverse_before} after={defaults.traverse_after} "
            f"diff={defaults.show_diff}",
        )
        table.add_row(
            "Default Timing",
            f"animation={defaults.animation_duration}s delay={defaults.delay_after_action}s",
        )

        self.console.print(table)

    def print_tool_table(self, tools: list["ToolDefinition"]):
        """Print advertised tools with their parameters"""
        table = Table(title="Tools", show_header=True, border_style="cyan")
        table.add_column("Tool", style="tool", no_wrap=True)
        table.add_column("Required", style="param")
        table.add_column("Optional", style="dim")
        table.add_column("Description")

        for tool in tools:
            required = [p.name for p in tool.parameters if p.required]
            optional = [p.name for p in tool.parameters if not p.required]
            table.add_row(tool.name, ", ".join(required), ", ".join(optional), tool.description)

        self.console.print(table)

    def print_success(self, message: str):
        """Print success message"""
        self.console.print(f"[success]✓[/success] {message}")

    def print_error(self, message: str):
        """Print error message"""
        self.console.print(f"[error]✗[/error] {message}")

    def print_warning(self, message: str):
        """Print warning message"""
        self.console.print(f"[warning]⚠[/warning] {message}")


# Global console instance
console = MacosUseConsole()


def setup_rich_logging() -> None:
    """
    Install Rich's traceback handler globally.

    structlog configuration is handled separately in utils/logging.py.
    """
    install_rich_traceback(
        show_locals=False,
        width=120,
        extra_lines=3,
        theme="monokai",
        word_wrap=False,
        suppress=[structlog],
    )
