"""Unit tests for the crawl tool."""

import json

import httpx
import pytest
import respx
from httpx import Response

from firecrawl_mcp.core.exceptions import ErrorKind, ToolError
from firecrawl_mcp.tools.crawl import CrawlTool

BASE_URL = "https://api.test.firecrawl.dev/v1"


@pytest.fixture
def crawl_tool(http_client, fast_retry_config):
    return CrawlTool(http_client, fast_retry_config)


def test_definition(crawl_tool):
    definition = crawl_tool.get_definition()
    assert definition.name == "crawl"
    assert definition.required_fields == frozenset({"url"})
    assert {"maxDepth", "excludePaths", "scrapeOptions"} <= set(
        definition.input_schema["properties"]
    )


@pytest.mark.parametrize(
    "args,expected",
    [
        ({"url": "https://docs.example.com"}, True),
        (
            {
                "url": "https://docs.example.com",
                "maxDepth": 2,
                "limit": 50,
                "includePaths": ["/guides/*"],
                "excludePaths": ["/blog/*"],
                "allowExternalLinks": False,
                "webhook": "https://hooks.example.com/crawl",
                "scrapeOptions": {"formats": ["markdown"]},
            },
            True,
        ),
        ({}, False),
        ({"url": ["https://docs.example.com"]}, False),
        ({"url": "https://docs.example.com", "maxDepth": "2"}, False),
        ({"url": "https://docs.example.com", "excludePaths": "/blog/*"}, False),
        ({"url": "https://docs.example.com", "ignoreSitemap": 1}, False),
        ({"url": "https://docs.example.com", "scrapeOptions": "markdown"}, False),
    ],
)
def test_validate(crawl_tool, args, expected):
    assert crawl_tool.validate(args) is expected


@respx.mock
async def test_execute_returns_job(crawl_tool):
    body = {"success": True, "id": "crawl-123", "url": f"{BASE_URL}/crawl/crawl-123"}
    respx.post(f"{BASE_URL}/crawl").mock(return_value=Response(200, json=body))

    result = await crawl_tool.execute({"url": "https://docs.example.com", "limit": 10})

    assert json.loads(result["content"][0]["text"]) == body


@respx.mock
async def test_execute_exhausts_retries_on_server_error(crawl_tool, fast_retry_config):
    route = respx.post(f"{BASE_URL}/crawl").mock(
        return_value=Response(500, json={"error": "worker crashed"})
    )

    with pytest.raises(ToolError) as exc_info:
        await crawl_tool.execute({"url": "https://docs.example.com"})

    assert route.call_count == fast_retry_config.max_retries + 1
    assert exc_info.value == ToolError(ErrorKind.INTERNAL, "API error: worker crashed")


@respx.mock
async def test_execute_connection_refused(crawl_tool):
    route = respx.post(f"{BASE_URL}/crawl").mock(
        side_effect=httpx.ConnectError("Connection refused")
    )

    with pytest.raises(ToolError) as exc_info:
        await crawl_tool.execute({"url": "https://docs.example.com"})

    assert route.call_count == 1
    assert exc_info.value.kind == ErrorKind.NETWORK_OR_TRANSPORT
    assert exc_info.value.message == "Network error: Connection refused"
