"""
dotdigital API v2 client.

This module implements the CampaignService interface over the dotdigital REST
API using HTTP basic authentication.

API Documentation: https://developer.dotdigital.com/reference/campaigns
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from campaign_replace.config import settings
from campaign_replace.dotdigital.exceptions import TransientServiceError
from campaign_replace.dotdigital.result import ServiceResult
from campaign_replace.dotdigital.service import CampaignService
from campaign_replace.models.campaign import AccountInfo, Campaign

logger = structlog.get_logger(__name__)

TRANSIENT_STATUS_CODES = frozenset({408, 429})


def _is_transient_status(status_code: int) -> bool:
    return status_code in TRANSIENT_STATUS_CODES or status_code >= 500


def _error_message(response: httpx.Response) -> str:
    """
    Extract the failure reason from a dotdigital error response.

    dotdigital error format:
    {
        "message": "ERROR_CAMPAIGN_NOT_FOUND"
    }
    """
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"


class DotdigitalClient(CampaignService):
    """
    dotdigital API client for campaign find-and-replace.

    Read operations turn every failure (including network errors) into a
    failed ServiceResult. update_campaign raises TransientServiceError for
    failures worth retrying so the caller's retry policy can handle them.
    """

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str | None = None,
        timeout: float | None = None,
        page_size: int | None = None,
        follow_api_endpoint: bool = True,
    ):
        """
        Initialize dotdigital client.

        Args:
            username: API user name
            password: API user password
            base_url: API host (defaults to settings.api_base_url)
            timeout: Per-request timeout in seconds (defaults to settings.http_timeout)
            page_size: Campaigns per list page (defaults to settings.list_page_size)
            follow_api_endpoint: Switch to the account's regional host after verification
        """
        if not username or not password:
            raise ValueError("dotdigital username and password are required")

        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.page_size = page_size or settings.list_page_size
        self.follow_api_endpoint = follow_api_endpoint

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=httpx.BasicAuth(username, password),
            timeout=timeout or settings.http_timeout,
            headers={"Accept": "application/json", "User-Agent": "campaign-replace/1.0"},
        )

    async def verify_account(self) -> ServiceResult[AccountInfo]:
        """
        Verify credentials by fetching account info.

        On success, re-targets the client at the account's regional API host
        when the account reports one.
        """
        result = await self._get_json("verify_account", "/v2/account-info")
        if result.failed:
            return result

        try:
            account = AccountInfo.model_validate(result.data)
        except ValidationError as e:
            logger.error("account_info_parse_error", error=str(e))
            return ServiceResult.fail(f"Unexpected account info response: {e}")

        endpoint = account.api_endpoint
        if self.follow_api_endpoint and endpoint and endpoint != self.base_url:
            logger.info(
                "api_endpoint_switched",
                old_base_url=self.base_url,
                new_base_url=endpoint,
            )
            self.base_url = endpoint
            self.client.base_url = endpoint

        logger.info("account_verified", account_id=account.id)
        return ServiceResult.ok(account, status_code=result.status_code)

    async def fetch_campaign(self, campaign_id: int) -> ServiceResult[Campaign]:
        """Fetch a single campaign, including its HTML and plain-text content."""
        result = await self._get_json("fetch_campaign", f"/v2/campaigns/{campaign_id}")
        if result.failed:
            return result

        try:
            campaign = Campaign.model_validate(result.data)
        except ValidationError as e:
            logger.error("campaign_parse_error", campaign_id=campaign_id, error=str(e))
            return ServiceResult.fail(f"Unexpected campaign response: {e}")

        return ServiceResult.ok(campaign, status_code=result.status_code)

    async def list_campaigns(self) -> ServiceResult[list[Campaign]]:
        """
        List all campaigns, following pagination.

        Pages are requested with select/skip until a page shorter than the page
        size is returned.
        """
        campaigns: list[Campaign] = []
        skip = 0

        while True:
            result = await self._get_json(
                "list_campaigns",
                "/v2/campaigns",
                params={"select": self.page_size, "skip": skip},
            )
            if result.failed:
                return result

            page = result.data
            if not isinstance(page, list):
                return ServiceResult.fail("Unexpected campaign list response")

            try:
                campaigns.extend(Campaign.model_validate(item) for item in page)
            except ValidationError as e:
                logger.error("campaign_list_parse_error", skip=skip, error=str(e))
                return ServiceResult.fail(f"Unexpected campaign list response: {e}")

            logger.debug("campaign_page_fetched", skip=skip, count=len(page))

            if len(page) < self.page_size:
                break
            skip += len(page)

        logger.info("campaigns_listed", count=len(campaigns))
        return ServiceResult.ok(campaigns)

    async def update_campaign(self, campaign: Campaign) -> ServiceResult[Campaign]:
        """
        Update a campaign with new content.

        Raises:
            TransientServiceError: For network errors, timeouts, 429 and 5xx responses
        """
        log = logger.bind(campaign_id=campaign.id)

        try:
            response = await self.client.put(
                f"/v2/campaigns/{campaign.id}",
                json=campaign.to_api_payload(),
            )
        except httpx.HTTPError as e:
            log.warning("update_request_error", error=str(e))
            raise TransientServiceError("update_campaign", str(e)) from e

        if _is_transient_status(response.status_code):
            message = _error_message(response)
            log.warning("update_transient_failure", status_code=response.status_code, error=message)
            raise TransientServiceError("update_campaign", message, response.status_code)

        if not response.is_success:
            message = _error_message(response)
            log.warning("update_rejected", status_code=response.status_code, error=message)
            return ServiceResult.fail(message, status_code=response.status_code)

        if not response.content:
            return ServiceResult.ok(campaign, status_code=response.status_code)

        try:
            updated = Campaign.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            log.warning("update_response_parse_error", error=str(e))
            updated = campaign

        return ServiceResult.ok(updated, status_code=response.status_code)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def _get_json(
        self, operation: str, url: str, params: dict[str, Any] | None = None
    ) -> ServiceResult[Any]:
        """
        Issue a GET request and decode the JSON body.

        Network errors and non-2xx responses become failed results.
        """
        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("http_error", operation=operation, url=url, error=str(e))
            return ServiceResult.fail(f"Request failed: {e}")

        if not response.is_success:
            message = _error_message(response)
            logger.warning(
                "request_failed",
                operation=operation,
                status_code=response.status_code,
                error=message,
            )
            return ServiceResult.fail(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("json_decode_error", operation=operation, error=str(e))
            return ServiceResult.fail(f"Invalid JSON response: {e}", response.status_code)

        return ServiceResult.ok(data, status_code=response.status_code)
