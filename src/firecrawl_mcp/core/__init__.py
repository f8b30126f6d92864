"""Core module for Firecrawl MCP.

Exports the exception types shared by every layer. Configuration lives in
firecrawl_mcp.core.config and is imported explicitly at bootstrap.
"""

from firecrawl_mcp.core.exceptions import (
    FirecrawlMCPError,
    ConfigurationError,
    ErrorKind,
    ToolError,
)

__all__ = [
    "FirecrawlMCPError",
    "ConfigurationError",
    "ErrorKind",
    "ToolError",
]
