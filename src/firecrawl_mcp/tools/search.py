"""Web search tool (POST /search)."""

from typing import Any, Dict

from firecrawl_mcp.tools.base import (
    BaseTool,
    all_optional,
    is_number,
    is_object,
    is_str,
    is_string_list,
)


def _valid_scrape_options(value: Any) -> bool:
    return is_object(value) and all_optional(value, {"formats": is_string_list})


class SearchTool(BaseTool):
    """Runs a web search, optionally scraping each result."""

    name = "search_content"
    description = "Search content using Firecrawl API"
    endpoint = "/search"

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query",
                },
                "scrapeOptions": {
                    "type": "object",
                    "properties": {
                        "formats": {
                            "type": "array",
                            "items": {"type": "string", "enum": ["markdown"]},
                            "description": "Output formats",
                        },
                    },
                },
                "limit": {
                    "type": "number",
                    "description": "Maximum number of results",
                    "minimum": 1,
                    "maximum": 100,
                },
                "lang": {
                    "type": "string",
                    "description": "Language code",
                    "default": "en",
                },
                "country": {
                    "type": "string",
                    "description": "Country code",
                    "default": "us",
                },
                "location": {
                    "type": "string",
                    "description": "Location parameter",
                },
                "timeout": {
                    "type": "number",
                    "description": "Request timeout in milliseconds",
                    "default": 60000,
                },
            },
            "required": ["query"],
        }

    def validate(self, args: Any) -> bool:
        if not is_object(args) or not is_str(args.get("query")):
            return False

        # limit range is advertised in the schema, enforced upstream
        return all_optional(args, {
            "scrapeOptions": _valid_scrape_options,
            "limit": is_number,
            "lang": is_str,
            "country": is_str,
            "location": is_str,
            "timeout": is_number,
        })
