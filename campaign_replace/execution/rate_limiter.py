"""
Rate limiter for remote campaign updates.

Bounds how many operations may start within any rolling window. Uses a sliding
log of the most recent admission times: a new admission is scheduled no earlier
than one refresh period after the admission `limit_for_period` places before
it. Callers wait (asynchronously) for their slot, up to a configured timeout.
"""

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog

from campaign_replace.config import Settings
from campaign_replace.execution.exceptions import RateLimitExceededError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RateLimiterConfig:
    """
    Rate limiter configuration.

    Attributes:
        limit_refresh_period: Window length in seconds
        limit_for_period: Maximum admissions per window
        timeout_duration: Maximum seconds a caller may wait for admission
    """

    limit_refresh_period: float = 60.0
    limit_for_period: int = 5
    timeout_duration: float = 3600.0

    def __post_init__(self):
        if self.limit_refresh_period <= 0:
            raise ValueError("limit_refresh_period must be positive")
        if self.limit_for_period < 1:
            raise ValueError("limit_for_period must be at least 1")
        if self.timeout_duration < 0:
            raise ValueError("timeout_duration must not be negative")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RateLimiterConfig":
        return cls(
            limit_refresh_period=settings.rate_limit_refresh_period,
            limit_for_period=settings.rate_limit_for_period,
            timeout_duration=settings.rate_limit_timeout,
        )


class RateLimiter:
    """
    Admission control over a rolling window.

    Not shared between runs: each run constructs its own limiter. The clock and
    sleep functions are injectable so tests can drive time explicitly.

    Example:
        >>> limiter = RateLimiter(RateLimiterConfig(60.0, 5, 3600.0))
        >>> await limiter.acquire_permission()  # may wait for a free slot
    """

    def __init__(
        self,
        config: RateLimiterConfig,
        name: str = "update_campaign",
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self.name = name
        self._clock = clock
        self._sleep = sleep
        self._admissions: deque[float] = deque(maxlen=config.limit_for_period)

    def reserve_permission(self) -> float:
        """
        Reserve the next admission slot without waiting.

        Returns:
            Seconds the caller must wait before starting its operation

        Raises:
            RateLimitExceededError: If the wait would exceed the timeout. No
                slot is reserved in that case.
        """
        now = self._clock()
        admit_at = now
        if len(self._admissions) == self.config.limit_for_period:
            admit_at = max(now, self._admissions[0] + self.config.limit_refresh_period)

        wait = admit_at - now
        if wait > self.config.timeout_duration:
            logger.warning(
                "rate_limit_timeout",
                limiter=self.name,
                wait_seconds=wait,
                timeout_seconds=self.config.timeout_duration,
            )
            raise RateLimitExceededError(self.name, wait, self.config.timeout_duration)

        self._admissions.append(admit_at)
        return wait

    async def acquire_permission(self, on_wait: Callable[[float], None] | None = None) -> None:
        """
        Wait until an admission slot is available.

        Args:
            on_wait: Called with the wait in seconds before a non-zero wait starts

        Raises:
            RateLimitExceededError: If no slot is available within the timeout
        """
        wait = self.reserve_permission()
        if wait > 0:
            logger.info(
                "rate_limit_wait",
                limiter=self.name,
                wait_seconds=round(wait, 3),
                message=f"Waiting {wait:.1f}s for rate limit permit",
            )
            if on_wait is not None:
                on_wait(wait)
            await self._sleep(wait)
