"""Firecrawl MCP Tools Package - one handler per upstream endpoint.

Each handler advertises a JSON input schema, checks argument shape, and
forwards the call to the Firecrawl API under the retry executor:
- ScrapeTool: scrape_url → /scrape
- SearchTool: search_content → /search
- CrawlTool: crawl → /crawl
- MapTool: map → /map
- ExtractTool: extract → /extract (plus batched multi-URL fan-out)
"""

from typing import List

import httpx

from firecrawl_mcp.client.retry import RetryConfig
from firecrawl_mcp.tools.base import BaseTool, ToolDefinition, text_response
from firecrawl_mcp.tools.crawl import CrawlTool
from firecrawl_mcp.tools.extract import ExtractionResult, ExtractTool
from firecrawl_mcp.tools.map import MapTool
from firecrawl_mcp.tools.scrape import ScrapeTool
from firecrawl_mcp.tools.search import SearchTool

TOOL_CLASSES = (ScrapeTool, SearchTool, CrawlTool, MapTool, ExtractTool)


def build_tools(client: httpx.AsyncClient, retry_config: RetryConfig) -> List[BaseTool]:
    """Instantiate every tool handler around a shared client and retry config."""
    return [cls(client, retry_config) for cls in TOOL_CLASSES]


__all__ = [
    "BaseTool",
    "ToolDefinition",
    "text_response",
    "ScrapeTool",
    "SearchTool",
    "CrawlTool",
    "MapTool",
    "ExtractTool",
    "ExtractionResult",
    "TOOL_CLASSES",
    "build_tools",
]
