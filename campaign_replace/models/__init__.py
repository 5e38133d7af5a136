"""Data models for campaigns and find-and-replace runs."""

from campaign_replace.models.campaign import AccountInfo, AccountProperty, Campaign
from campaign_replace.models.run import (
    CampaignOutcome,
    CampaignResult,
    RunConfig,
    RunErrorKind,
    RunStatus,
    RunSummary,
)

__all__ = [
    "AccountInfo",
    "AccountProperty",
    "Campaign",
    "CampaignOutcome",
    "CampaignResult",
    "RunConfig",
    "RunErrorKind",
    "RunStatus",
    "RunSummary",
]
