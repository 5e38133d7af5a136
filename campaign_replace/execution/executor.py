"""
Rate-limited retry executor.

Combines the rate limiter and the retry policy: a unit of work is admitted by
the limiter once, then executed under the retry policy. Retries of an admitted
unit do not consume further permits. Any failure surfaces as
ExecutionFailedError.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from campaign_replace.config import Settings
from campaign_replace.execution.exceptions import ExecutionFailedError, RateLimitExceededError
from campaign_replace.execution.rate_limiter import RateLimiter, RateLimiterConfig
from campaign_replace.execution.retry import RetryConfig, RetryPolicy

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RateLimitedRetryExecutor:
    """
    Executes units of work behind a rate limiter and a retry policy.

    Example:
        >>> executor = RateLimitedRetryExecutor.from_settings(settings)
        >>> result = await executor.execute(lambda: client.update_campaign(campaign))
    """

    def __init__(self, rate_limiter: RateLimiter, retry_policy: RetryPolicy):
        self.rate_limiter = rate_limiter
        self.retry_policy = retry_policy

    @classmethod
    def from_settings(
        cls, settings: Settings, name: str = "update_campaign"
    ) -> "RateLimitedRetryExecutor":
        """Build an executor with fresh limiter and retry state for one run."""
        return cls(
            rate_limiter=RateLimiter(RateLimiterConfig.from_settings(settings), name=name),
            retry_policy=RetryPolicy(RetryConfig.from_settings(settings), name=name),
        )

    async def execute(
        self,
        func: Callable[[], Awaitable[T]],
        on_wait: Callable[[float], None] | None = None,
    ) -> T:
        """
        Admit and run one unit of work.

        Args:
            func: Zero-argument coroutine function performing one attempt
            on_wait: Called with the wait in seconds when admission must wait

        Returns:
            The unit of work's result

        Raises:
            ExecutionFailedError: If admission timed out or all attempts failed
        """
        name = self.rate_limiter.name

        try:
            await self.rate_limiter.acquire_permission(on_wait)
        except RateLimitExceededError as e:
            raise ExecutionFailedError(name, attempts=0, cause=e) from e

        try:
            return await self.retry_policy.execute(func)
        except Exception as e:
            logger.error(
                "execution_failed",
                operation=name,
                attempts=self.retry_policy.last_attempts,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExecutionFailedError(name, self.retry_policy.last_attempts, cause=e) from e
