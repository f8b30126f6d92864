"""Unit tests for the MCP server binding."""

import json

import mcp.types as types
import pytest
import respx
from httpx import Response
from mcp.shared.exceptions import McpError

from firecrawl_mcp import __version__
from firecrawl_mcp.server.app import SERVER_NAME, create_server
from firecrawl_mcp.server.dispatcher import ToolDispatcher
from firecrawl_mcp.tools import build_tools

BASE_URL = "https://api.test.firecrawl.dev/v1"


@pytest.fixture
def server(http_client, fast_retry_config):
    return create_server(ToolDispatcher(build_tools(http_client, fast_retry_config)))


def test_server_identity(server):
    assert server.name == SERVER_NAME
    assert server.version == __version__
    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers


async def test_list_tools_handler(server):
    handler = server.request_handlers[types.ListToolsRequest]

    result = await handler(types.ListToolsRequest(method="tools/list"))

    tools = result.root.tools
    assert [t.name for t in tools] == ["scrape_url", "search_content", "crawl", "map", "extract"]
    assert tools[0].inputSchema["required"] == ["url"]


@respx.mock
async def test_call_tool_handler(server):
    body = {"success": True, "links": ["https://example.com/"]}
    respx.post(f"{BASE_URL}/map").mock(return_value=Response(200, json=body))
    handler = server.request_handlers[types.CallToolRequest]

    result = await handler(
        types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name="map", arguments={"url": "https://example.com"}),
        )
    )

    call_result = result.root
    assert call_result.isError is False
    assert len(call_result.content) == 1
    assert json.loads(call_result.content[0].text) == body


async def test_call_tool_handler_raises_coded_error(server):
    """Failures surface as McpError so the session replies with a JSON-RPC error."""
    handler = server.request_handlers[types.CallToolRequest]

    with pytest.raises(McpError) as exc_info:
        await handler(
            types.CallToolRequest(
                method="tools/call",
                params=types.CallToolRequestParams(name="scrape_url", arguments={}),
            )
        )

    assert exc_info.value.error.code == types.INVALID_PARAMS
    assert exc_info.value.error.message == "Invalid scrape_url arguments"
