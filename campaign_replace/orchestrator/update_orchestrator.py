"""
Update orchestrator for campaign find-and-replace runs.

Drives one run end to end:

1. Validate the request (selector, find text, campaign id) before any remote call
2. Verify the account credentials
3. Resolve the campaign set (one campaign by id, or all campaigns)
4. For each campaign, in service order: ensure content is loaded, match, and
   either report (dry run) or submit the update through the rate-limited
   retry executor
5. Report a summary

Per-campaign update rejections are recorded and processing continues. Executor
failures and mid-run fetch failures produce an ABORTED result, which stops the
loop.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable

import click
import structlog

from campaign_replace.config import settings as default_settings
from campaign_replace.content.replacer import (
    apply_replacement,
    campaign_matches,
    count_occurrences,
)
from campaign_replace.dotdigital.client import DotdigitalClient
from campaign_replace.dotdigital.result import ServiceResult
from campaign_replace.dotdigital.service import CampaignService
from campaign_replace.execution.exceptions import ExecutionFailedError
from campaign_replace.execution.executor import RateLimitedRetryExecutor
from campaign_replace.models.campaign import Campaign
from campaign_replace.models.run import (
    CampaignOutcome,
    CampaignResult,
    RunConfig,
    RunErrorKind,
    RunSummary,
)

logger = structlog.get_logger(__name__)

ServiceFactory = Callable[[RunConfig], CampaignService]
ExecutorFactory = Callable[[], RateLimitedRetryExecutor]


def default_service_factory(config: RunConfig) -> CampaignService:
    """Create a dotdigital client for the run's credentials."""
    return DotdigitalClient(config.username, config.password)


def default_executor_factory() -> RateLimitedRetryExecutor:
    """Create an executor with fresh rate limiter and retry state."""
    return RateLimitedRetryExecutor.from_settings(default_settings)


def parse_campaign_id(raw: str) -> int | None:
    """Parse a campaign id as a positive integer, or return None if invalid."""
    text = raw.strip()
    if not text.isdecimal():
        return None
    value = int(text)
    return value if value > 0 else None


class UpdateOrchestrator:
    """
    Runs a find-and-replace over campaigns.

    Operator-facing progress lines go through `report` (click.echo by default);
    structured diagnostics go to the structlog logger.
    """

    def __init__(
        self,
        service_factory: ServiceFactory = default_service_factory,
        executor_factory: ExecutorFactory = default_executor_factory,
        report: Callable[[str], None] = click.echo,
    ):
        """
        Initialize orchestrator.

        Args:
            service_factory: Builds the campaign service client from the run config
            executor_factory: Builds the per-run rate-limited retry executor
            report: Receives human-readable progress lines
        """
        self.service_factory = service_factory
        self.executor_factory = executor_factory
        self.report = report

    async def run(self, config: RunConfig) -> RunSummary:
        """
        Execute one find-and-replace run.

        Never raises for expected failures: every error is reported and
        recorded on the returned summary.

        Args:
            config: Operator request

        Returns:
            RunSummary with status, error (if aborted) and per-campaign results
        """
        summary = RunSummary(dry_run=config.dry_run)
        log = logger.bind(run_id=str(uuid.uuid4()), dry_run=config.dry_run)

        campaign_id = self._validate(config, summary)
        if summary.is_aborted:
            log.warning("run_rejected", error_kind=summary.error_kind, error=summary.error_message)
            return summary

        if config.dry_run:
            self.report("Dry run is enabled, no campaigns will be updated")
        self.report(f"Finding text '{config.find}' and replacing with '{config.replace}'")
        log.info("run_started", campaign_id=campaign_id, all_campaigns=config.all_campaigns)

        service = self.service_factory(config)
        try:
            await self._run_with_service(service, config, campaign_id, summary)
        finally:
            await service.close()

        log.info(
            "run_finished",
            status=summary.status,
            error_kind=summary.error_kind,
            campaigns_found=summary.campaigns_found,
            matched=summary.matched_count,
            updated=summary.updated_count,
            failed=summary.failed_count,
        )
        return summary

    def _validate(self, config: RunConfig, summary: RunSummary) -> int | None:
        """
        Check the request before any remote call.

        Returns:
            The parsed campaign id for a single-campaign run, else None. On
            invalid input the summary is aborted and the error reported.
        """
        if config.campaign_id is not None and config.all_campaigns:
            self._abort(
                summary,
                RunErrorKind.INVALID_SELECTOR,
                "Only one of 'campaign' or 'all-campaigns' options should be set",
            )
            return None

        if config.campaign_id is None and not config.all_campaigns:
            self._abort(
                summary,
                RunErrorKind.INVALID_SELECTOR,
                "One of 'campaign' or 'all-campaigns' options must be set",
            )
            return None

        if not config.username or not config.password:
            self._abort(
                summary,
                RunErrorKind.AUTHENTICATION_FAILED,
                "A dotdigital username and password are required",
            )
            return None

        if not config.find:
            self._abort(
                summary, RunErrorKind.INVALID_FIND_TEXT, "The text to find must not be empty"
            )
            return None

        if config.campaign_id is None:
            return None

        campaign_id = parse_campaign_id(config.campaign_id)
        if campaign_id is None:
            self._abort(
                summary,
                RunErrorKind.INVALID_CAMPAIGN_ID,
                f"Unable to parse [{config.campaign_id}] for the campaign id",
            )
        return campaign_id

    async def _run_with_service(
        self,
        service: CampaignService,
        config: RunConfig,
        campaign_id: int | None,
        summary: RunSummary,
    ) -> None:
        account = await service.verify_account()
        if account.failed:
            self._abort(
                summary,
                RunErrorKind.AUTHENTICATION_FAILED,
                f"Failed to get account info with error: {account.message}",
            )
            self.report("Check the username and password are correct")
            return

        campaigns = await self._resolve_campaigns(service, campaign_id, summary)
        if campaigns is None:
            return

        summary.campaigns_found = len(campaigns)
        self.report(f"Found {len(campaigns)} campaigns")

        executor = self.executor_factory()
        for campaign in campaigns:
            result = await self._process_campaign(service, executor, campaign, config)
            summary.results.append(result)
            if result.is_fatal:
                self._abort(summary, RunErrorKind.EXECUTION_FAILED, result.message or "")
                break

        self._report_summary(summary)

    async def _resolve_campaigns(
        self,
        service: CampaignService,
        campaign_id: int | None,
        summary: RunSummary,
    ) -> list[Campaign] | None:
        """Resolve the campaign set, or abort the summary and return None."""
        if campaign_id is not None:
            fetched = await self._load_campaign(service, campaign_id)
            if fetched.failed:
                self._abort(summary, RunErrorKind.FETCH_FAILED, fetched.message or "")
                return None
            return [fetched.data]

        listed = await service.list_campaigns()
        if listed.failed:
            self._abort(
                summary,
                RunErrorKind.FETCH_FAILED,
                f"Unable to fetch all campaigns, failed with error: {listed.message}",
            )
            return None
        return list(listed.data or [])

    async def _load_campaign(
        self, service: CampaignService, campaign_id: int
    ) -> ServiceResult[Campaign]:
        """Fetch a campaign with content; failed results carry an operator message."""
        fetched = await service.fetch_campaign(campaign_id)
        if fetched.failed:
            return ServiceResult.fail(
                f"Unable to fetch campaign with id [{campaign_id}], "
                f"failed with error: {fetched.message}",
                status_code=fetched.status_code,
            )
        return fetched

    async def _ensure_content_loaded(
        self, service: CampaignService, campaign: Campaign
    ) -> ServiceResult[Campaign]:
        if campaign.content_loaded:
            return ServiceResult.ok(campaign)
        return await self._load_campaign(service, campaign.id)

    async def _process_campaign(
        self,
        service: CampaignService,
        executor: RateLimitedRetryExecutor,
        campaign: Campaign,
        config: RunConfig,
    ) -> CampaignResult:
        """Drive one campaign to a terminal outcome."""
        log = logger.bind(campaign_id=campaign.id)
        self.report(f"Processing campaign {campaign.id}, {campaign.name}")

        loaded = await self._ensure_content_loaded(service, campaign)
        if loaded.failed:
            return self._result(campaign, CampaignOutcome.ABORTED, loaded.message)
        campaign = loaded.data

        if not campaign_matches(campaign, config.find):
            log.debug("campaign_no_match")
            return self._result(campaign, CampaignOutcome.NO_MATCH)

        occurrences = count_occurrences(
            campaign.html_content, campaign.plain_text_content, config.find
        )
        log.info("campaign_matched", occurrences=occurrences)

        if config.dry_run:
            self.report(f"- found - {campaign.id}, {campaign.name}")
            return self._result(campaign, CampaignOutcome.MATCHED_DRY_RUN)

        updated = apply_replacement(campaign, config.find, config.replace)
        try:
            response = await executor.execute(
                lambda: service.update_campaign(updated),
                on_wait=lambda wait: self.report(
                    f"Rate limit reached, waiting {wait:.0f}s "
                    f"before updating campaign {campaign.id}"
                ),
            )
        except ExecutionFailedError as e:
            log.error("campaign_update_aborted", error=str(e), attempts=e.attempts)
            return self._result(campaign, CampaignOutcome.ABORTED, str(e))

        if response.failed:
            message = (
                f"Unable to update campaign with id [{campaign.id}], "
                f"failed with error: {response.message}"
            )
            self.report(message)
            return self._result(campaign, CampaignOutcome.FAILED, message)

        self.report(f"- updated - {campaign.id}, {campaign.name}")
        log.info("campaign_updated", occurrences=occurrences)
        return self._result(campaign, CampaignOutcome.UPDATED)

    def _report_summary(self, summary: RunSummary) -> None:
        if summary.dry_run:
            self.report(f"{summary.matched_count} with matching text, not updated")
            self.report("Run without dry-run to update them")
        else:
            self.report(f"{summary.matched_count} with matching text, updated")
            if summary.failed_count:
                self.report(f"{summary.failed_count} with matching text, failed to update")

        if summary.is_aborted:
            self.report("Aborted, remaining campaigns were not processed")
        else:
            self.report("Finished")

    def _abort(self, summary: RunSummary, kind: RunErrorKind, message: str) -> None:
        summary.abort(kind, message)
        self.report(message)

    @staticmethod
    def _result(
        campaign: Campaign, outcome: CampaignOutcome, message: str | None = None
    ) -> CampaignResult:
        return CampaignResult(
            campaign_id=campaign.id,
            campaign_name=campaign.name,
            outcome=outcome,
            message=message,
        )
