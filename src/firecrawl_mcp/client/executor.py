"""Retry-with-backoff executor for upstream requests.

Runs a caller-supplied coroutine factory until it succeeds, a failure is
judged non-retryable, or the retry ceiling is reached. Waiting between
attempts is done with an awaitable sleep so other tool calls keep running
on the event loop meanwhile.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from firecrawl_mcp.client.errors import classify
from firecrawl_mcp.client.retry import RetryConfig, compute_delay, should_retry
from firecrawl_mcp.core.exceptions import ToolError

log = structlog.get_logger()

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class AttemptState:
    """Retry bookkeeping for a single executor invocation.

    Attributes:
        attempts_made: Retries performed so far (the first call is not a retry).
        last_failure: Exception raised by the most recent attempt.
    """
    attempts_made: int = 0
    last_failure: Optional[BaseException] = None


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    config: RetryConfig,
    *,
    sleep: Sleep = asyncio.sleep,
    state: Optional[AttemptState] = None,
) -> T:
    """Run ``operation`` with retry and exponential backoff.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt.
        config: Retry configuration.
        sleep: Awaitable sleep taking seconds. Tests inject a recorder.
        state: Optional caller-owned state to observe the attempt counter.
            Must be fresh; a state is not reused across invocations.

    Returns:
        The operation's result, unmodified.

    Raises:
        ToolError: On a non-retryable failure or once retries are exhausted.
        ValueError: If ``state`` already records attempts or a failure.
    """
    if state is None:
        state = AttemptState()
    elif state.attempts_made != 0 or state.last_failure is not None:
        raise ValueError("AttemptState must be fresh for each invocation")

    while state.attempts_made <= config.max_retries:
        try:
            return await operation()
        except Exception as e:
            state.last_failure = e

            if not should_retry(e, state.attempts_made, config):
                raise _normalized(e, config)

            state.attempts_made += 1
            delay_ms = compute_delay(state.attempts_made, config)

            if config.debug:
                log.debug(
                    "request_retry",
                    attempt=state.attempts_made,
                    max_retries=config.max_retries,
                    delay_ms=delay_ms,
                    error=str(e),
                )

            await sleep(delay_ms / 1000)

    # All retries exhausted
    raise _normalized(state.last_failure, config)


def _normalized(failure: Optional[BaseException], config: RetryConfig) -> ToolError:
    """Classify a failure, chaining the original as the cause."""
    error = classify(failure, config.debug)
    if error is not failure:
        error.__cause__ = failure
    return error
