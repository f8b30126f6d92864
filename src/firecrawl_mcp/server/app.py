"""MCP server binding over stdio.

Registers the ToolDispatcher's list/call operations on a low-level MCP
Server and runs it on stdin/stdout. All logging goes to stderr; stdout is
reserved for the protocol.

Usage:
    from firecrawl_mcp.server.app import serve

    await serve(settings)
"""

from typing import List

import mcp.types as types
import structlog
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from firecrawl_mcp import __version__
from firecrawl_mcp.client.http import create_http_client
from firecrawl_mcp.core.config import Settings
from firecrawl_mcp.server.dispatcher import ToolDispatcher
from firecrawl_mcp.tools import build_tools

SERVER_NAME = "firecrawl"

log = structlog.get_logger()


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Build an MCP server exposing the dispatcher's tools.

    tools/call is registered as a raw request handler rather than through
    ``@server.call_tool()``: the SDK wrapper validates arguments against the
    schemas and folds every exception into an ``isError`` result. Here the
    schemas are advisory, argument checking is the dispatcher's shallow
    shape check, and an McpError reaches the client as a JSON-RPC error
    carrying its code.
    """
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema,
            )
            for definition in dispatcher.list_tools()
        ]

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.call_tool(req.params.name, req.params.arguments)
        content = [
            types.TextContent(type="text", text=block["text"])
            for block in result["content"]
        ]
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    server.request_handlers[types.CallToolRequest] = call_tool

    return server


async def serve(settings: Settings) -> None:
    """Run the MCP server on stdio until the client disconnects."""
    retry_config = settings.retry_config()

    async with create_http_client(settings) as client:
        dispatcher = ToolDispatcher(build_tools(client, retry_config))
        server = create_server(dispatcher)

        log.info(
            "server_starting",
            name=SERVER_NAME,
            version=__version__,
            base_url=settings.api_base_url,
            tools=dispatcher.tool_names,
            max_retries=retry_config.max_retries,
        )

        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )

    log.info("server_stopped", name=SERVER_NAME)
