from .retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    compute_delay,
    is_transient,
    should_retry,
)
from .errors import classify
from .executor import AttemptState, execute_with_retry

__all__ = [
    "DEFAULT_RETRY_CONFIG",
    "RetryConfig",
    "compute_delay",
    "is_transient",
    "should_retry",
    "classify",
    "AttemptState",
    "execute_with_retry",
]
