"""
Firecrawl MCP - Model Context Protocol server for the Firecrawl API

Exposes scrape, search, crawl, map and extract as MCP tools, forwarding
each call to the Firecrawl HTTP API with retry and error normalization.
"""

from firecrawl_mcp.client import RetryConfig, execute_with_retry, classify
from firecrawl_mcp.core.exceptions import ErrorKind, ToolError

__version__ = "1.0.0"
__author__ = "Firecrawl MCP Team"

__all__ = [
    "RetryConfig",
    "execute_with_retry",
    "classify",
    "ErrorKind",
    "ToolError",
]
