"""
Retry logic with exponential backoff.

This module provides the retry policy applied to remote campaign updates:
a bounded number of attempts with a delay that grows geometrically between
attempts, up to a maximum.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

import httpx
import structlog

from campaign_replace.config import Settings
from campaign_replace.dotdigital.exceptions import TransientServiceError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_RETRY_EXCEPTIONS: tuple[type[BaseException], ...] = (
    TransientServiceError,
    httpx.TransportError,
)


@dataclass(frozen=True)
class RetryConfig:
    """
    Retry policy configuration.

    Attributes:
        max_attempts: Total attempts including the first one
        initial_interval: Delay in seconds before the first retry
        multiplier: Factor applied to the delay after each retry
        max_interval: Upper bound for any single delay
        retry_exceptions: Exception types considered transient
    """

    max_attempts: int = 5
    initial_interval: float = 0.5
    multiplier: float = 2.0
    max_interval: float = 30.0
    retry_exceptions: tuple[type[BaseException], ...] = field(
        default=DEFAULT_RETRY_EXCEPTIONS
    )

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_interval < 0 or self.max_interval < 0:
            raise ValueError("retry intervals must not be negative")
        if self.multiplier < 1.0:
            raise ValueError("multiplier must be at least 1.0")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryConfig":
        return cls(
            max_attempts=settings.retry_max_attempts,
            initial_interval=settings.retry_initial_interval,
            multiplier=settings.retry_multiplier,
            max_interval=settings.retry_max_interval,
        )

    def interval(self, retry_number: int) -> float:
        """
        Delay before the given retry (1 for the first retry).

        Example with defaults: 0.5s, 1.0s, 2.0s, 4.0s
        """
        delay = self.initial_interval * (self.multiplier ** (retry_number - 1))
        return min(delay, self.max_interval)


class RetryPolicy:
    """
    Executes an async callable, retrying transient failures with backoff.

    Non-transient exceptions propagate immediately. After the last attempt the
    last transient exception is re-raised.
    """

    def __init__(
        self,
        config: RetryConfig,
        name: str = "update_campaign",
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config
        self.name = name
        self._sleep = sleep
        self.last_attempts = 0

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        """
        Run func under the retry policy.

        Args:
            func: Zero-argument coroutine function (one attempt per call)

        Returns:
            Result of the first successful attempt

        Raises:
            Exception: The last transient error once attempts are exhausted,
                or any non-transient error as soon as it occurs
        """
        max_attempts = self.config.max_attempts
        self.last_attempts = 0

        for attempt in range(1, max_attempts + 1):
            self.last_attempts = attempt
            try:
                return await func()

            except self.config.retry_exceptions as e:
                if attempt == max_attempts:
                    logger.error(
                        "retry_exhausted",
                        operation=self.name,
                        attempt=attempt,
                        max_attempts=max_attempts,
                        error=str(e),
                    )
                    raise

                delay = self.config.interval(attempt)
                logger.warning(
                    "retry_attempt",
                    operation=self.name,
                    attempt=attempt,
                    max_attempts=max_attempts,
                    delay=delay,
                    error=str(e),
                    message=f"Retry {attempt}/{max_attempts - 1} for {self.name} after {delay}s delay",
                )
                await self._sleep(delay)

        # Should never reach here, but satisfy type checker
        raise RuntimeError("Retry logic error: exhausted retries without raising")
