"""Rate limiting and retry for remote mutation calls."""

from campaign_replace.execution.exceptions import ExecutionFailedError, RateLimitExceededError
from campaign_replace.execution.executor import RateLimitedRetryExecutor
from campaign_replace.execution.rate_limiter import RateLimiter, RateLimiterConfig
from campaign_replace.execution.retry import RetryConfig, RetryPolicy

__all__ = [
    "ExecutionFailedError",
    "RateLimitExceededError",
    "RateLimitedRetryExecutor",
    "RateLimiter",
    "RateLimiterConfig",
    "RetryConfig",
    "RetryPolicy",
]
