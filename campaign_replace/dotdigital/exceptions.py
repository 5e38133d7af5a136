"""Custom exceptions for the dotdigital campaign service client.

Service-level failures (bad credentials, unknown campaign, rejected update) are
returned as failed ServiceResult values. These exceptions cover failures that
are worth retrying.
"""

from typing import Optional


class CampaignServiceError(Exception):
    """Raised when a call to the campaign service cannot complete.

    Attributes:
        operation: Client operation that failed (e.g., "update_campaign")
        status_code: HTTP status code, if a response was received
    """

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None):
        """Initialize CampaignServiceError.

        Args:
            operation: Client operation name
            message: Human-readable failure description
            status_code: HTTP status code, or None for transport errors
        """
        self.operation = operation
        self.status_code = status_code
        status = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"{operation} failed{status}: {message}")


class TransientServiceError(CampaignServiceError):
    """Raised for failures that may succeed on retry (network errors, 429, 5xx)."""

    pass
