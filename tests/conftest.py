"""
Firecrawl MCP Test Configuration

Shared pytest fixtures and configuration for all test types.
"""

import os
from typing import Any, AsyncGenerator, Callable, Generator, List, Optional

import httpx
import pytest
import structlog

from firecrawl_mcp.client.retry import RetryConfig

BASE_URL = "https://api.test.firecrawl.dev/v1"


# Configure pytest collection
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo any structlog configuration a test (e.g. the CLI) applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clean_firecrawl_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment from leaking into settings."""
    for key in list(os.environ.keys()):
        if key.startswith("FIRECRAWL_") or key == "DEBUG":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def base_url() -> str:
    """Upstream base URL used by mocked clients."""
    return BASE_URL


@pytest.fixture
def retry_config() -> RetryConfig:
    """Retry configuration with the default backoff schedule."""
    return RetryConfig(
        max_retries=3,
        initial_delay_ms=1000,
        backoff_multiplier=2,
        max_delay_ms=8000,
    )


@pytest.fixture
def fast_retry_config() -> RetryConfig:
    """Real retries with millisecond delays, for end-to-end tool tests."""
    return RetryConfig(
        max_retries=2,
        initial_delay_ms=1,
        backoff_multiplier=2,
        max_delay_ms=2,
    )


@pytest.fixture
def no_retry_config() -> RetryConfig:
    """Single-attempt configuration."""
    return RetryConfig(max_retries=0)


class RecordingSleep:
    """Awaitable sleep stand-in that records requested delays."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Sleep replacement that returns immediately and records delays."""
    return RecordingSleep()


@pytest.fixture
async def http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async client pointed at the test base URL (mock with respx)."""
    async with httpx.AsyncClient(
        base_url=BASE_URL,
        headers={"Authorization": "Bearer test-api-key"},
    ) as client:
        yield client


@pytest.fixture
def status_error() -> Callable[..., httpx.HTTPStatusError]:
    """
    Factory fixture building an httpx.HTTPStatusError.

    Args:
        status: HTTP status code
        body: Optional JSON body for the response
        path: Request path under the base URL
    """
    def _make(
        status: int,
        body: Optional[Any] = None,
        path: str = "/scrape",
    ) -> httpx.HTTPStatusError:
        request = httpx.Request("POST", f"{BASE_URL}{path}")
        if body is None:
            response = httpx.Response(status, request=request)
        else:
            response = httpx.Response(status, json=body, request=request)
        return httpx.HTTPStatusError(
            f"HTTP {status} for url '{request.url}'",
            request=request,
            response=response,
        )
    return _make


@pytest.fixture
def api_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Minimal environment for loading settings."""
    monkeypatch.setenv("FIRECRAWL_API_KEY", "test-api-key")
    monkeypatch.setenv("FIRECRAWL_API_BASE_URL", BASE_URL)
    monkeypatch.setenv("FIRECRAWL_LOG_LEVEL", "ERROR")
