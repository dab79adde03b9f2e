"""MCP server wiring: exposes the dispatcher over the stdio transport."""

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolRequest, CallToolResult, ServerResult, Tool

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.core.logging import get_logger
from cloudstack_mcp.dispatcher import ToolDispatcher

logger = get_logger(__name__)


def create_server(
    dispatcher: ToolDispatcher, name: str = "cloudstack-mcp", version: str | None = None
) -> Server:
    """Create the MCP server and register the tool handlers."""
    server = Server(name, version=version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return dispatcher.list_tools()

    # Registered without the call_tool() decorator: an McpError raised by the
    # dispatcher must reach the client as a JSON-RPC error with its own code.
    async def call_tool(request: CallToolRequest) -> ServerResult:
        content = await dispatcher.dispatch(request.params.name, request.params.arguments)
        return ServerResult(CallToolResult(content=content))

    server.request_handlers[CallToolRequest] = call_tool
    return server


async def run_stdio_server(
    client: CloudStackClient, name: str = "cloudstack-mcp", version: str | None = None
) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    dispatcher = ToolDispatcher(client)
    server = create_server(dispatcher, name=name, version=version)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                f"CloudStack MCP server running on stdio ({len(dispatcher.list_tools())} tools)"
            )
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await client.close()
        logger.info("CloudStack MCP server stopped")
