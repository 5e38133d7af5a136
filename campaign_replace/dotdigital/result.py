"""
Service Result Models.

Provides the success-or-failure result type returned by campaign service
operations. A result either carries a value or a failure message, never both.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Result of a campaign service call.

    Attributes:
        success: Whether the call succeeded
        data: Returned value when successful
        message: Failure reason reported by the service when unsuccessful
        status_code: HTTP status code of the response, if any
    """

    success: bool
    data: Optional[T] = None
    message: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def failed(self) -> bool:
        return not self.success

    @classmethod
    def ok(cls, data: T, status_code: Optional[int] = None) -> "ServiceResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, status_code=status_code)

    @classmethod
    def fail(cls, message: str, status_code: Optional[int] = None) -> "ServiceResult[T]":
        """Create a failed result."""
        return cls(success=False, message=message, status_code=status_code)
