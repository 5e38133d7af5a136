"""
Mock campaign service and clock for testing.

MockCampaignService is an in-memory CampaignService that records every call,
so tests can assert exactly which remote operations a run performed.
FakeClock drives the rate limiter and retry back-off without real waiting.
"""

from typing import Any, Optional, Union

from campaign_replace.dotdigital.result import ServiceResult
from campaign_replace.dotdigital.service import CampaignService
from campaign_replace.models.campaign import AccountInfo, Campaign


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


UpdateEffect = Union[ServiceResult[Campaign], BaseException]


class MockCampaignService(CampaignService):
    """
    In-memory CampaignService recording every call.

    Attributes:
        calls: (operation, argument) tuples in call order
        update_effects: Queue of results or exceptions for successive
            update_campaign calls; when empty, updates succeed
    """

    def __init__(
        self,
        campaigns: Optional[list[Campaign]] = None,
        account_result: Optional[ServiceResult[AccountInfo]] = None,
        list_result: Optional[ServiceResult[list[Campaign]]] = None,
        listing: Optional[list[Campaign]] = None,
        fetch_failures: Optional[dict[int, str]] = None,
        update_effects: Optional[list[UpdateEffect]] = None,
    ):
        self.campaigns = {c.id: c for c in (campaigns or [])}
        self.account_result = account_result or ServiceResult.ok(AccountInfo(id=1))
        self.list_result = list_result
        self.listing = listing
        self.fetch_failures = fetch_failures or {}
        self.update_effects = list(update_effects or [])
        self.calls: list[tuple[str, Any]] = []
        self.updated: list[Campaign] = []
        self.closed = False

    async def verify_account(self) -> ServiceResult[AccountInfo]:
        self.calls.append(("verify_account", None))
        return self.account_result

    async def fetch_campaign(self, campaign_id: int) -> ServiceResult[Campaign]:
        self.calls.append(("fetch_campaign", campaign_id))
        if campaign_id in self.fetch_failures:
            return ServiceResult.fail(self.fetch_failures[campaign_id], status_code=404)
        if campaign_id not in self.campaigns:
            return ServiceResult.fail("ERROR_CAMPAIGN_NOT_FOUND", status_code=404)
        return ServiceResult.ok(self.campaigns[campaign_id].model_copy())

    async def list_campaigns(self) -> ServiceResult[list[Campaign]]:
        self.calls.append(("list_campaigns", None))
        if self.list_result is not None:
            return self.list_result
        if self.listing is not None:
            return ServiceResult.ok(list(self.listing))
        return ServiceResult.ok([c.model_copy() for c in self.campaigns.values()])

    async def update_campaign(self, campaign: Campaign) -> ServiceResult[Campaign]:
        self.calls.append(("update_campaign", campaign.id))
        self.updated.append(campaign)
        if self.update_effects:
            effect = self.update_effects.pop(0)
            if isinstance(effect, BaseException):
                raise effect
            return effect
        return ServiceResult.ok(campaign)

    async def close(self) -> None:
        self.closed = True

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


