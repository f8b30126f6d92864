"""Unit tests for RetryConfig, should_retry and compute_delay."""

import httpx
import pytest

from firecrawl_mcp.client.retry import (
    RetryConfig,
    compute_delay,
    is_transient,
    should_retry,
)
from firecrawl_mcp.core.exceptions import ErrorKind, ToolError


def test_retry_config_creation():
    """Test RetryConfig dataclass creation and validation."""
    # Default values
    config = RetryConfig()
    assert config.max_retries == 3
    assert config.initial_delay_ms == 1000
    assert config.backoff_multiplier == 2.0
    assert config.max_delay_ms == 8000
    assert config.debug is False

    # Validation - max_retries
    with pytest.raises(ValueError, match="max_retries must be >= 0"):
        RetryConfig(max_retries=-1)

    # Validation - initial_delay_ms
    with pytest.raises(ValueError, match="initial_delay_ms must be > 0"):
        RetryConfig(initial_delay_ms=0)

    # Validation - backoff_multiplier
    with pytest.raises(ValueError, match="backoff_multiplier must be > 1"):
        RetryConfig(backoff_multiplier=1)

    # Validation - max_delay_ms
    with pytest.raises(ValueError, match="max_delay_ms must be >= initial_delay_ms"):
        RetryConfig(initial_delay_ms=2000, max_delay_ms=1000)


def test_retry_config_is_immutable():
    config = RetryConfig()
    with pytest.raises(AttributeError):
        config.max_retries = 10  # type: ignore[misc]


def test_zero_retries_is_valid():
    assert RetryConfig(max_retries=0).max_retries == 0


class TestShouldRetry:
    """Retry decisions by failure type and attempt count."""

    @pytest.mark.parametrize("status", [429, 500])
    def test_retryable_status_below_ceiling(self, status, status_error, retry_config):
        failure = status_error(status)
        for attempts in range(retry_config.max_retries):
            assert should_retry(failure, attempts, retry_config) is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 422, 502, 503])
    def test_other_statuses_never_retried(self, status, status_error, retry_config):
        failure = status_error(status)
        for attempts in range(retry_config.max_retries + 2):
            assert should_retry(failure, attempts, retry_config) is False

    @pytest.mark.parametrize(
        "failure",
        [
            httpx.ReadTimeout("read timed out"),
            httpx.ConnectTimeout("connect timed out"),
            httpx.PoolTimeout("pool timed out"),
            httpx.ReadError("Connection reset by peer"),
            httpx.WriteError("Broken pipe"),
            httpx.RemoteProtocolError("Server disconnected without sending a response."),
        ],
    )
    def test_transport_hiccups_retried(self, failure, retry_config):
        assert should_retry(failure, 0, retry_config) is True

    def test_connection_refused_not_retried(self, retry_config):
        failure = httpx.ConnectError("Connection refused")
        assert should_retry(failure, 0, retry_config) is False

    @pytest.mark.parametrize(
        "failure",
        [
            ValueError("bad input"),
            RuntimeError("boom"),
            ToolError(ErrorKind.INTERNAL, "already normalized"),
            "not an exception",
            None,
        ],
    )
    def test_unknown_failures_not_retried(self, failure, retry_config):
        assert should_retry(failure, 0, retry_config) is False

    @pytest.mark.parametrize("attempts", [3, 4, 100])
    def test_ceiling_stops_retries_regardless_of_kind(self, attempts, status_error, retry_config):
        for failure in (
            status_error(429),
            status_error(500),
            httpx.ReadTimeout("timeout"),
            httpx.ReadError("reset"),
        ):
            assert should_retry(failure, attempts, retry_config) is False

    def test_zero_max_retries_never_retries(self, status_error, no_retry_config):
        assert should_retry(status_error(500), 0, no_retry_config) is False

    def test_is_transient(self, status_error):
        assert is_transient(status_error(429)) is True
        assert is_transient(status_error(404)) is False
        assert is_transient(httpx.ReadTimeout("t")) is True


class TestComputeDelay:
    """Exponential backoff with a ceiling."""

    def test_documented_schedule(self):
        config = RetryConfig(initial_delay_ms=1000, backoff_multiplier=2, max_delay_ms=8000)
        delays = [compute_delay(n, config) for n in range(1, 6)]
        assert delays == [1000, 2000, 4000, 8000, 8000]

    def test_first_retry_uses_initial_delay(self):
        config = RetryConfig(initial_delay_ms=250, backoff_multiplier=3, max_delay_ms=10000)
        assert compute_delay(1, config) == 250
        assert compute_delay(2, config) == 750

    def test_non_decreasing_and_capped(self):
        config = RetryConfig(initial_delay_ms=300, backoff_multiplier=1.5, max_delay_ms=5000)
        delays = [compute_delay(n, config) for n in range(1, 30)]
        assert delays == sorted(delays)
        assert max(delays) == 5000
        assert all(d <= config.max_delay_ms for d in delays)

    def test_huge_attempt_number_clamps(self):
        config = RetryConfig()
        assert compute_delay(10_000, config) == config.max_delay_ms
