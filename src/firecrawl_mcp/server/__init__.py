"""MCP server layer: tool dispatch and the stdio server binding."""

from firecrawl_mcp.server.dispatcher import ToolDispatcher
from firecrawl_mcp.server.app import SERVER_NAME, create_server, serve

__all__ = [
    "ToolDispatcher",
    "SERVER_NAME",
    "create_server",
    "serve",
]
