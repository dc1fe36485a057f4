"""
Command-line interface for macos-use.

Provides commands for serving over stdio, listing tools, and running a
single tool call without an MCP client.
"""

import asyncio
import json
import sys

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .exceptions import ConfigurationError
from .utils.rich_logging import console as rich_console

app = typer.Typer(
    name="macos-use",
    help="MCP tool server for macOS UI automation",
    add_completion=False,
)

# Command results go to stdout; diagnostics go to the stderr console
console = Console()


def _load_server():
    from .core.config import get_config
    from .server import MacosUseServer

    return MacosUseServer(get_config())


@app.command()
def version():
    """Show version information."""
    from .core.config import get_config

    config = get_config()
    console.print(f"[bold cyan]macos-use[/bold cyan] version {__version__}")
    console.print(f"Server identity: {config.server_name} {config.server_version}")


@app.command()
def serve(
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the startup banner"),
):
    """
    Serve the tools over stdio.

    stdout carries the MCP protocol; the banner and all logs go to stderr.
    """
    from .core.config import get_config
    from .utils.logging import setup_logging

    try:
        config = get_config()
        config.ensure_log_directory()
        setup_logging(config)
        server = _load_server()
    except (ConfigurationError, ValidationError) as e:
        rich_console.print_error(f"Server setup failed: {escape(str(e))}")
        sys.exit(1)

    if not quiet:
        rich_console.print_banner(config.server_name, config.server_version)
        rich_console.print_config_summary(config)

    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        rich_console.print_warning("Interrupted")
        return
    rich_console.print_success("Client disconnected, server stopped")


@app.command()
def tools():
    """List the advertised tools and their parameters."""
    from .core.config import get_config
    from .tools.definitions import build_tool_definitions

    rich_console.print_tool_table(build_tool_definitions(get_config().tool_prefix))


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name (canonical or short alias)"),
    args: str = typer.Option("{}", "--args", "-a", help="Tool arguments as a JSON object"),
):
    """
    Run one tool call and print the response text.

    Examples:
        macos-use call refresh-traversal --args '{"pid": 501}'
        macos-use call macos-use_open_application_and_traverse -a '{"identifier": "Calculator"}'

    Exits with status 1 when the response is an error.
    """
    try:
        arguments = json.loads(args)
    except json.JSONDecodeError as e:
        rich_console.print_error(f"--args is not valid JSON: {escape(str(e))}")
        sys.exit(2)
    if not isinstance(arguments, dict):
        rich_console.print_error("--args must be a JSON object")
        sys.exit(2)

    from .utils.logging import setup_logging

    try:
        setup_logging()
        server = _load_server()
    except (ConfigurationError, ValidationError) as e:
        rich_console.print_error(f"Server setup failed: {escape(str(e))}")
        sys.exit(1)

    try:
        response = asyncio.run(server.handle_call(name, arguments))
    finally:
        server.close()

    typer.echo(response.text)
    if response.is_error:
        sys.exit(1)


# Configuration subcommand group
config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")


@config_app.command("show")
def config_show():
    """
    Display current configuration settings.

    Values are resolved from init args, MACOS_USE_* environment variables,
    .env, then [tool.macos_use] in pyproject.toml.
    """
    from rich.table import Table

    from .core.config import get_config

    try:
        config = get_config()
    except ValidationError as e:
        rich_console.print_error(f"Failed to load config: {escape(str(e))}")
        sys.exit(1)

    table = Table(title="Active Settings")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="yellow")

    for key, value in sorted(config.model_dump(exclude_none=True).items()):
        table.add_row(key, str(value))

    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
