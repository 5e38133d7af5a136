"""Custom exceptions for rate-limited, retried execution."""

from typing import Optional


class RateLimitExceededError(Exception):
    """Raised when a rate limit permit cannot be obtained within the timeout.

    Attributes:
        limiter_name: Name of the rate limiter that refused admission
        wait_seconds: Wait that would have been required for a permit
        timeout_seconds: Maximum wait the limiter is configured to allow
    """

    def __init__(self, limiter_name: str, wait_seconds: float, timeout_seconds: float):
        self.limiter_name = limiter_name
        self.wait_seconds = wait_seconds
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Rate limiter '{limiter_name}' does not permit further calls: "
            f"next permit in {wait_seconds:.1f}s exceeds timeout of {timeout_seconds:.1f}s"
        )


class ExecutionFailedError(Exception):
    """Raised when a unit of work could not be executed.

    Either admission was refused by the rate limiter or every retry attempt
    failed. The underlying error is available as ``cause`` (and ``__cause__``).

    Attributes:
        operation: Name of the operation being executed
        attempts: Number of attempts made (0 if never admitted)
        cause: The last error raised
    """

    def __init__(self, operation: str, attempts: int, cause: Optional[BaseException] = None):
        self.operation = operation
        self.attempts = attempts
        self.cause = cause
        reason = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
        super().__init__(f"{operation} failed after {attempts} attempt(s): {reason}")
