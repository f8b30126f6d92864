"""Site crawl tool (POST /crawl)."""

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


class CrawlTool(BaseTool):
    """Starts a crawl of a website from a base URL."""

    name = "crawl"
    description = "Crawls a website starting from a base URL"
    endpoint = "/crawl"

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "Base URL to start crawling from",
                },
                "maxDepth": {
                    "type": "number",
                    "description": "Maximum crawl depth",
                    "default": 2,
                },
                "excludePaths": string_array_schema("URL patterns to exclude"),
                "includePaths": string_array_schema("URL patterns to include"),
                "ignoreSitemap": {
                    "type": "boolean",
                    "description": "Ignore sitemap.xml during crawling",
                },
                "ignoreQueryParameters": {
                    "type": "boolean",
                    "description": "Ignore URL query parameters when comparing URLs",
                },
                "limit": {
                    "type": "number",
                    "description": "Maximum pages to crawl",
                    "default": 10000,
                },
                "allowBackwardLinks": {
                    "type": "boolean",
                    "description": "Allow crawling links that point to parent directories",
                },
                "allowExternalLinks": {
                    "type": "boolean",
                    "description": "Allow crawling links to external domains",
                },
                "webhook": {
                    "type": "string",
                    "description": "Webhook URL for progress notifications",
                },
                "scrapeOptions": {
                    "type": "object",
                    "description": "Options for scraping crawled pages",
                },
            },
            "required": ["url"],
        }

    def validate(self, args: Any) -> bool:
        if not is_object(args) or not is_str(args.get("url")):
            return False

        return all_optional(args, {
            "maxDepth": is_number,
            "excludePaths": is_string_list,
            "includePaths": is_string_list,
            "ignoreSitemap": is_bool,
            "ignoreQueryParameters": is_bool,
            "limit": is_number,
            "allowBackwardLinks": is_bool,
            "allowExternalLinks": is_bool,
            "webhook": is_str,
            "scrapeOptions": is_object,
        })
