"""Tool dispatcher: routes named MCP tool calls to their handlers.

The dispatcher owns the handler set. It advertises the tool schemas,
rejects malformed arguments before any upstream request, and turns every
ToolError into the MCP error envelope.

Usage:
    from firecrawl_mcp.server.dispatcher import ToolDispatcher

    dispatcher = ToolDispatcher(build_tools(client, retry_config))
    result = await dispatcher.call_tool("scrape_url", {"url": "https://example.com"})
"""

from typing import Any, Dict, List, Optional, Sequence

import structlog
from mcp.shared.exceptions import McpError
from mcp.types import METHOD_NOT_FOUND, ErrorData

from firecrawl_mcp.core.exceptions import ErrorKind, ToolError
from firecrawl_mcp.tools.base import BaseTool, ToolDefinition

log = structlog.get_logger()


class ToolDispatcher:
    """Routes tool calls by name after a shallow argument check."""

    def __init__(self, tools: Sequence[BaseTool]) -> None:
        """Initialize the dispatcher.

        Args:
            tools: Tool handlers. Names must be unique.

        Raises:
            ValueError: If two handlers share a name.
        """
        self._tools: Dict[str, BaseTool] = {}
        for tool in tools:
            name = tool.get_definition().name
            if name in self._tools:
                raise ValueError(f"Duplicate tool name: {name}")
            self._tools[name] = tool

    @property
    def tool_names(self) -> List[str]:
        return list(self._tools)

    def get_tool(self, name: str) -> Optional[BaseTool]:
        return self._tools.get(name)

    def list_tools(self) -> List[ToolDefinition]:
        """Return the definitions of all tools, in registration order."""
        return [tool.get_definition() for tool in self._tools.values()]

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]],
    ) -> Dict[str, Any]:
        """Validate and execute a named tool call.

        Args:
            name: Tool name from the tools/call request.
            arguments: Raw arguments from the client.

        Returns:
            MCP response ``{"content": [{"type": "text", "text": ...}]}``.

        Raises:
            McpError: METHOD_NOT_FOUND for an unknown tool, otherwise the
                code matching the ToolError kind.
        """
        tool = self._tools.get(name)
        if tool is None:
            log.warning("unknown_tool_requested", tool=name)
            raise McpError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

        if not tool.validate(arguments):
            error = ToolError(ErrorKind.INVALID_PARAMETERS, f"Invalid {name} arguments")
            log.warning("tool_arguments_invalid", tool=name)
            raise error.to_mcp_error()

        try:
            return await tool.execute(arguments)
        except ToolError as e:
            log.error(
                "tool_call_failed",
                tool=name,
                kind=e.kind.value,
                code=e.code,
                error=e.message,
            )
            raise e.to_mcp_error() from e
