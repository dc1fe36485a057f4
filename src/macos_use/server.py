"""
MCP server for the macos-use tools.

Connects the pipeline (extract -> dispatch -> act -> articulate) to the MCP
SDK. `handle_call` is transport-neutral so the whole pipeline can be driven
without a client; `build_mcp_server` and `run` add the stdio transport.
"""

from typing import Any

from mcp.server import NotificationOptions, Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Prompt, Resource, TextContent, Tool

from .core.act import ExecutionSerializer
from .core.articulate import ResultArticulator
from .core.config import ServerConfig, get_config
from .core.dispatch import ActionDispatcher
from .engine import AutomationEngine, load_engine
from .exceptions import DispatchError, MacosUseError, ParameterError
from .models.contracts import ToolCallResponse
from .models.value import arguments_from_json
from .tools.definitions import ToolDefinition, build_tool_definitions
from .utils.error_handler import ErrorHandler
from .utils.logging import act_logger, articulate_logger, call_context, get_logger, server_logger


class MacosUseServer:
    """
    Tool server: one validated action per call, executed on a shared engine.

    Example:
        server = MacosUseServer(engine=DryRunEngine())
        response = await server.handle_call(
            "macos-use_click_and_traverse", {"pid": 501, "x": 10.5, "y": 20}
        )
        response.is_error  # False
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        engine: AutomationEngine | None = None,
    ):
        """
        Args:
            config: Server configuration (global config when omitted)
            engine: Automation engine (resolved from config.engine when omitted)

        Raises:
            ConfigurationError: If the configured engine cannot be loaded
        """
        self.config = config or get_config()
        self.logger = get_logger(__name__)
        rich = self.config.enable_rich_console
        self.ops_logger = server_logger.with_console(rich)

        self.dispatcher = ActionDispatcher(
            prefix=self.config.tool_prefix,
            defaults=self.config.default_options(),
            max_duration=self.config.max_duration_seconds,
        )
        self.serializer = ExecutionSerializer(
            engine or load_engine(self.config.engine), ops_logger=act_logger.with_console(rich)
        )
        self.articulator = ResultArticulator(ops_logger=articulate_logger.with_console(rich))
        self.tool_definitions: list[ToolDefinition] = build_tool_definitions(self.config.tool_prefix)

        self.logger.info(
            "server_initialized",
            name=self.config.server_name,
            version=self.config.server_version,
            tools=[tool.name for tool in self.tool_definitions],
        )

    def list_tools(self) -> list[Tool]:
        """MCP Tool declarations for every dispatchable tool."""
        return [tool.to_mcp_tool() for tool in self.tool_definitions]

    async def handle_call(self, name: str, arguments: dict[str, Any] | None) -> ToolCallResponse:
        """
        Run one tool call through the full pipeline.

        Never raises: every failure becomes a response with is_error=True
        whose text names the tool.

        Args:
            name: Tool name (canonical or short alias)
            arguments: Decoded JSON arguments, or None

        Returns:
            ToolCallResponse with the serialized ActionResult or an error message
        """
        with call_context(name):
            return await self._handle(name, arguments)

    async def _handle(self, name: str, arguments: dict[str, Any] | None) -> ToolCallResponse:
        self.ops_logger.log_operation_start("call_tool")
        self.logger.debug("call_tool_arguments", arguments=arguments)

        try:
            args = arguments_from_json(arguments)
            call = self.dispatcher.dispatch(name, args)
            result = await self.serializer.execute_async(call.action, call.options)
            response = self.articulator.articulate(call.tool, result, call.options)
        except (ParameterError, DispatchError) as e:
            self.ops_logger.log_operation_error("call_tool", e)
            return ToolCallResponse(
                text=f"Error processing parameters for tool '{name}': {e.user_message}",
                is_error=True,
                metadata=ErrorHandler.describe(e),
            )
        except Exception as e:
            self.ops_logger.log_operation_error("call_tool", e)
            message = e.user_message if isinstance(e, MacosUseError) else str(e)
            return ToolCallResponse(
                text=f"Unexpected setup error executing tool '{name}': {message}",
                is_error=True,
                metadata=ErrorHandler.describe(e),
            )

        if call.warnings:
            response = response.model_copy(
                update={"metadata": {**response.metadata, "warnings": call.warnings}}
            )
        self.ops_logger.log_operation_complete("call_tool", details={"is_error": response.is_error})
        return response

    @staticmethod
    def to_call_tool_result(response: ToolCallResponse) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=response.text)],
            isError=response.is_error,
        )

    def build_mcp_server(self) -> Server:
        """Create the MCP server and register its handlers."""
        server = Server(self.config.server_name, version=self.config.server_version)

        @server.list_tools()
        async def list_tools() -> list[Tool]:
            tools = self.list_tools()
            self.logger.info("list_tools", count=len(tools))
            return tools

        # Arguments are validated by the dispatcher, which coerces more
        # forgivingly than the advertised JSON schema.
        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
            return self.to_call_tool_result(await self.handle_call(name, arguments))

        @server.list_resources()
        async def list_resources() -> list[Resource]:
            self.logger.debug("list_resources")
            return []

        @server.read_resource()
        async def read_resource(uri: Any) -> str:
            self.logger.debug("read_resource", uri=str(uri))
            return f"dummy content for {uri}"

        @server.list_prompts()
        async def list_prompts() -> list[Prompt]:
            self.logger.debug("list_prompts")
            return []

        return server

    async def run(self) -> None:
        """Serve over stdio until the client disconnects."""
        server = self.build_mcp_server()
        options = server.create_initialization_options(
            notification_options=NotificationOptions(tools_changed=True)
        )
        self.logger.info("starting_stdio_transport", name=self.config.server_name)
        try:
            async with stdio_server() as (read_stream, write_stream):
                await server.run(read_stream, write_stream, options)
        finally:
            self.close()
        self.logger.info("server_stopped")

    def close(self) -> None:
        """Stop the execution context after queued actions finish."""
        self.serializer.shutdown(wait=True)
