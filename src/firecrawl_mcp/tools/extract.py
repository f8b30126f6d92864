"""Structured data extraction tool (POST /extract).

Besides the single-request ``execute`` path, ExtractTool offers a batched
fan-out over many URLs: each batch runs concurrently, one request per URL,
and batches are separated by a fixed pause to stay under upstream rate
limits.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import structlog

from firecrawl_mcp.client.executor import Sleep, execute_with_retry
from firecrawl_mcp.client.http import post_json
from firecrawl_mcp.core.exceptions import ToolError
from firecrawl_mcp.tools.base import (
    BaseTool,
    all_optional,
    is_bool,
    is_object,
    is_str,
    is_string_list,
)

log = structlog.get_logger()

DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_DELAY_MS = 1000


@dataclass
class ExtractionResult:
    """Outcome of extracting one URL in a batch."""

    url: str
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"url": self.url, "data": self.data}
        if self.error is not None:
            result["error"] = self.error
        return result


class ExtractTool(BaseTool):
    """Extracts structured data from one or more URLs."""

    name = "extract"
    description = "Extracts structured data from URLs"
    endpoint = "/extract"

    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "urls": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "URLs to extract from",
                },
                "prompt": {
                    "type": "string",
                    "description": "Extraction guidance prompt",
                },
                "schema": {
                    "type": "object",
                    "description": "Data structure schema",
                },
                "enableWebSearch": {
                    "type": "boolean",
                    "description": "Use web search for additional data",
                    "default": False,
                },
                "ignoreSitemap": {
                    "type": "boolean",
                    "description": "Ignore sitemap.xml during processing",
                },
                "includeSubdomains": {
                    "type": "boolean",
                    "description": "Include subdomains in processing",
                },
            },
            "required": ["urls"],
        }

    def validate(self, args: Any) -> bool:
        if not is_object(args) or not is_string_list(args.get("urls")):
            return False

        return all_optional(args, {
            "prompt": is_str,
            "schema": is_object,
            "enableWebSearch": is_bool,
            "ignoreSitemap": is_bool,
            "includeSubdomains": is_bool,
        })

    async def extract_url(
        self,
        url: str,
        prompt: Optional[str] = None,
        schema: Optional[Dict[str, Any]] = None,
    ) -> ExtractionResult:
        """Extract a single URL, capturing any failure on the result."""
        payload: Dict[str, Any] = {"urls": [url]}
        if prompt is not None:
            payload["prompt"] = prompt
        if schema is not None:
            payload["schema"] = schema

        try:
            data = await execute_with_retry(
                post_json(self.client, self.endpoint, payload),
                self.retry_config,
            )
        except ToolError as e:
            log.warning("extract_url_failed", url=url, kind=e.kind.value, error=e.message)
            return ExtractionResult(url=url, error=e.message)

        return ExtractionResult(url=url, data=data if isinstance(data, dict) else {"result": data})

    async def extract_batch(
        self,
        urls: List[str],
        *,
        prompt: Optional[str] = None,
        schema: Optional[Dict[str, Any]] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        delay_ms: int = DEFAULT_BATCH_DELAY_MS,
        sleep: Sleep = asyncio.sleep,
    ) -> List[ExtractionResult]:
        """
        Extract many URLs in fixed-size concurrent batches.

        Args:
            urls: URLs to extract, one upstream request each
            prompt: Optional extraction prompt sent with every request
            schema: Optional extraction schema sent with every request
            batch_size: Requests issued concurrently per batch
            delay_ms: Pause between consecutive batches
            sleep: Awaitable sleep taking seconds

        Returns:
            One result per URL, in input order
        """
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")

        results: List[ExtractionResult] = []
        log.info("extract_batch_started", urls=len(urls), batch_size=batch_size)

        for start in range(0, len(urls), batch_size):
            batch = urls[start:start + batch_size]
            results.extend(await asyncio.gather(
                *(self.extract_url(url, prompt=prompt, schema=schema) for url in batch)
            ))

            if start + batch_size < len(urls):
                await sleep(delay_ms / 1000)

        failed = sum(1 for r in results if not r.success)
        log.info("extract_batch_completed", urls=len(urls), failed=failed)
        return results
