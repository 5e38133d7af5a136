"""dotdigital campaign service client package."""

from campaign_replace.dotdigital.client import DotdigitalClient
from campaign_replace.dotdigital.exceptions import CampaignServiceError, TransientServiceError
from campaign_replace.dotdigital.result import ServiceResult
from campaign_replace.dotdigital.service import CampaignService

__all__ = [
    "CampaignService",
    "CampaignServiceError",
    "DotdigitalClient",
    "ServiceResult",
    "TransientServiceError",
]
