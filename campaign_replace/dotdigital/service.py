"""
Campaign service abstract interface.

The orchestrator depends only on this interface, so the dotdigital HTTP client
can be replaced by a fake in tests or by another provider.
"""

from abc import ABC, abstractmethod

from campaign_replace.dotdigital.result import ServiceResult
from campaign_replace.models.campaign import AccountInfo, Campaign


class CampaignService(ABC):
    """
    Abstract base class for a remote campaign-management service.

    Expected behavior:
    - Every operation returns a ServiceResult: a value on success, the
      service's failure message otherwise
    - verify_account() is called once before any campaign operation
    - fetch_campaign() returns a campaign with content populated
    - list_campaigns() may return campaigns without content
    - update_campaign() raises TransientServiceError for failures worth
      retrying; a rejection by the service is a failed result
    """

    @abstractmethod
    async def verify_account(self) -> ServiceResult[AccountInfo]:
        """
        Verify the configured credentials.

        Returns:
            Account details, or the service's rejection message
        """
        pass

    @abstractmethod
    async def fetch_campaign(self, campaign_id: int) -> ServiceResult[Campaign]:
        """
        Fetch a single campaign with its HTML and plain-text content.

        Args:
            campaign_id: Positive campaign identifier
        """
        pass

    @abstractmethod
    async def list_campaigns(self) -> ServiceResult[list[Campaign]]:
        """
        List all campaigns in service order. Content fields may be unset.
        """
        pass

    @abstractmethod
    async def update_campaign(self, campaign: Campaign) -> ServiceResult[Campaign]:
        """
        Replace a campaign's content on the service.

        Args:
            campaign: Full campaign with the new content

        Raises:
            TransientServiceError: For network errors, throttling or server errors
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the service client."""
        return None
