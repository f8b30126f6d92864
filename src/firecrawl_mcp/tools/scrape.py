"""Single-page scrape tool (POST /scrape)."""

from typing import Any, Dict

from firecrawl_mcp.tools.base import (
    BaseTool,
    all_optional,
    is_bool,
    is_number,
    is_object,
    is_str,
    is_string_list,
    string_array_schema,
)

SCRAPE_FORMATS = [
    "markdown",
    "html",
    "rawHtml",
    "links",
    "screenshot",
    "screenshot@fullPage",
    "json",
]


def _valid_json_options(value: Any) -> bool:
    return (
        is_object(value)
        and is_str(value.get("prompt"))
        and all_optional(value, {"schema": is_object, "systemPrompt": is_str})
    )


def _valid_location(value: Any) -> bool:
    return is_object(value) and all_optional(
        value, {"country": is_str, "languages": is_string_list}
    )


class ScrapeTool(BaseTool):
    """Fetches one page and returns its content in the requested formats."""

    name = "scrape_url"
    description = "Scrape content from a URL using Firecrawl API"
    endpoint = "/scrape"

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "URL to scrape",
                },
                "jsonOptions": {
                    "type": "object",
                    "properties": {
                        "prompt": {
                            "type": "string",
                            "description": "Prompt for extracting specific information",
                        },
                        "schema": {
                            "type": "object",
                            "description": "Schema for extraction",
                        },
                        "systemPrompt": {
                            "type": "string",
                            "description": "System prompt for extraction",
                        },
                    },
                    "required": ["prompt"],
                },
                "formats": {
                    "type": "array",
                    "items": {"type": "string", "enum": SCRAPE_FORMATS},
                    "description": "Output formats",
                },
                "onlyMainContent": {
                    "type": "boolean",
                    "description": "Only return main content excluding headers, navs, footers",
                    "default": True,
                },
                "includeTags": string_array_schema("Tags to include in output"),
                "excludeTags": string_array_schema("Tags to exclude from output"),
                "waitFor": {
                    "type": "number",
                    "description": "Delay in milliseconds before fetching content",
                    "default": 0,
                },
                "mobile": {
                    "type": "boolean",
                    "description": "Emulate mobile device",
                    "default": False,
                },
                "location": {
                    "type": "object",
                    "properties": {
                        "country": {
                            "type": "string",
                            "description": "ISO 3166-1 alpha-2 country code",
                        },
                        "languages": string_array_schema("Preferred languages/locales"),
                    },
                },
                "blockAds": {
                    "type": "boolean",
                    "description": "Enable ad/cookie popup blocking",
                    "default": True,
                },
            },
            "required": ["url"],
        }

    def validate(self, args: Any) -> bool:
        if not is_object(args) or not is_str(args.get("url")):
            return False

        return all_optional(args, {
            "jsonOptions": _valid_json_options,
            "formats": is_string_list,
            "onlyMainContent": is_bool,
            "includeTags": is_string_list,
            "excludeTags": is_string_list,
            "waitFor": is_number,
            "mobile": is_bool,
            "location": _valid_location,
            "blockAds": is_bool,
        })
