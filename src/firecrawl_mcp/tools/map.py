"""Site map tool (POST /map)."""

from typing import Any, Dict

from firecrawl_mcp.tools.base import (
    BaseTool,
    all_optional,
    is_bool,
    is_number,
    is_object,
    is_str,
)


class MapTool(BaseTool):
    """Lists the links of a website. The tree is built upstream."""

    name = "map"
    description = "Maps a website's structure"
    endpoint = "/map"

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "Base URL to map",
                },
                "search": {
                    "type": "string",
                    "description": "Search query for mapping",
                },
                "ignoreSitemap": {
                    "type": "boolean",
                    "description": "Ignore sitemap.xml during mapping",
                },
                "sitemapOnly": {
                    "type": "boolean",
                    "description": "Only use sitemap.xml for mapping",
                },
                "includeSubdomains": {
                    "type": "boolean",
                    "description": "Include subdomains in mapping",
                },
                "limit": {
                    "type": "number",
                    "description": "Maximum links to return",
                    "default": 5000,
                },
                "timeout": {
                    "type": "number",
                    "description": "Request timeout",
                },
            },
            "required": ["url"],
        }

    def validate(self, args: Any) -> bool:
        if not is_object(args) or not is_str(args.get("url")):
            return False

        return all_optional(args, {
            "search": is_str,
            "ignoreSitemap": is_bool,
            "sitemapOnly": is_bool,
            "includeSubdomains": is_bool,
            "limit": is_number,
            "timeout": is_number,
        })
