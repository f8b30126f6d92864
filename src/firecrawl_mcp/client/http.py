"""HTTP client construction for the Firecrawl API."""

from typing import Any, Awaitable, Callable, Dict

import httpx

from firecrawl_mcp import __version__
from firecrawl_mcp.core.config import Settings


def build_headers(api_key: str) -> Dict[str, str]:
    """Headers sent with every upstream request."""
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": f"firecrawl-mcp/{__version__}",
    }


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared async client used by every tool.

    The caller owns the client and must close it, typically with
    ``async with create_http_client(settings) as client:``.
    """
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        headers=build_headers(settings.api_key.get_secret_value()),
        timeout=settings.timeout_seconds,
    )


def post_json(
    client: httpx.AsyncClient,
    path: str,
    payload: Dict[str, Any],
) -> Callable[[], Awaitable[Any]]:
    """Build a retryable operation issuing one POST and decoding the JSON body.

    Non-2xx responses raise httpx.HTTPStatusError so the executor can
    inspect the status code.
    """
    async def operation() -> Any:
        response = await client.post(path, json=payload)
        response.raise_for_status()
        return response.json()

    return operation
