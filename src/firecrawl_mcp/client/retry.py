"""Retry configuration and decision functions for upstream requests."""

from dataclasses import dataclass

import httpx

# HTTP statuses worth retrying: rate limited, generic server error
RETRYABLE_STATUS_CODES = frozenset({429, 500})

# Connection dropped mid-request. A refused connection (ConnectError) is not
# in this set and fails fast.
CONNECTION_RESET_ERRORS = (
    httpx.ReadError,
    httpx.WriteError,
    httpx.RemoteProtocolError,
)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Delays are in milliseconds. Default schedule: 1s, 2s, 4s, capped at 8s.
    """
    max_retries: int = 3
    initial_delay_ms: int = 1000
    backoff_multiplier: float = 2.0
    max_delay_ms: int = 8000
    debug: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.initial_delay_ms <= 0:
            raise ValueError("initial_delay_ms must be > 0")
        if self.backoff_multiplier <= 1:
            raise ValueError("backoff_multiplier must be > 1")
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValueError("max_delay_ms must be >= initial_delay_ms")


DEFAULT_RETRY_CONFIG = RetryConfig()


def is_transient(failure: object) -> bool:
    """Return True if the failure is likely to succeed on retry."""
    if isinstance(failure, httpx.HTTPStatusError):
        return failure.response.status_code in RETRYABLE_STATUS_CODES
    return isinstance(failure, (httpx.TimeoutException, *CONNECTION_RESET_ERRORS))


def should_retry(failure: object, attempts_made: int, config: RetryConfig) -> bool:
    """Decide whether another attempt should be made.

    Args:
        failure: The exception raised by the last attempt.
        attempts_made: Retries already performed (0 after the first failure).
        config: Retry configuration.

    Returns:
        False once the retry ceiling is reached; otherwise whether the
        failure is transient.
    """
    if attempts_made >= config.max_retries:
        return False
    return is_transient(failure)


def compute_delay(attempt_number: int, config: RetryConfig) -> int:
    """Delay in milliseconds before the given (1-based) retry.

    The first retry waits exactly ``initial_delay_ms``; each later one is
    multiplied by ``backoff_multiplier``, capped at ``max_delay_ms``.
    """
    try:
        delay = config.initial_delay_ms * config.backoff_multiplier ** (attempt_number - 1)
    except OverflowError:
        return config.max_delay_ms
    return int(min(delay, config.max_delay_ms))
