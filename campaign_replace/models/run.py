"""
Run configuration and outcome models for the update orchestrator.

RunConfig carries what the operator asked for; CampaignResult and RunSummary
describe what happened, per campaign and for the run as a whole.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CampaignOutcome(str, Enum):
    """Terminal state of a single campaign within a run.

    - NO_MATCH: find text not present, nothing done
    - MATCHED_DRY_RUN: match found, mutation withheld (dry run)
    - UPDATED: match found and the update was accepted
    - FAILED: match found but the service rejected the update (non-fatal)
    - ABORTED: a fatal error occurred on this campaign and stopped the run
    """

    NO_MATCH = "no_match"
    MATCHED_DRY_RUN = "matched_dry_run"
    UPDATED = "updated"
    FAILED = "failed"
    ABORTED = "aborted"


class RunStatus(str, Enum):
    """Run-level terminal state."""

    COMPLETED = "completed"
    ABORTED = "aborted"


class RunErrorKind(str, Enum):
    """Why a run was aborted."""

    INVALID_SELECTOR = "invalid_selector"
    INVALID_FIND_TEXT = "invalid_find_text"
    INVALID_CAMPAIGN_ID = "invalid_campaign_id"
    AUTHENTICATION_FAILED = "authentication_failed"
    FETCH_FAILED = "fetch_failed"
    EXECUTION_FAILED = "execution_failed"


class RunConfig(BaseModel):
    """Operator request for one find-and-replace run.

    The selector is either campaign_id or all_campaigns. It is deliberately not
    validated here: the orchestrator reports an invalid selector to the operator
    instead of raising.
    """

    username: str
    password: str = Field(..., repr=False)
    find: str
    replace: str = ""
    campaign_id: Optional[str] = None
    all_campaigns: bool = False
    dry_run: bool = False


class CampaignResult(BaseModel):
    """Outcome of processing one campaign."""

    campaign_id: int
    campaign_name: str = ""
    outcome: CampaignOutcome
    message: Optional[str] = None

    @property
    def is_fatal(self) -> bool:
        """True when this result must stop the run."""
        return self.outcome == CampaignOutcome.ABORTED


class RunSummary(BaseModel):
    """Aggregated result of a run, reported to the operator at the end."""

    status: RunStatus = RunStatus.COMPLETED
    dry_run: bool = False
    error_kind: Optional[RunErrorKind] = None
    error_message: Optional[str] = None
    campaigns_found: int = 0
    results: list[CampaignResult] = Field(default_factory=list)

    @property
    def is_aborted(self) -> bool:
        return self.status == RunStatus.ABORTED

    @property
    def matched_count(self) -> int:
        """Campaigns with matching text: found (dry run) or updated."""
        counted = (
            CampaignOutcome.MATCHED_DRY_RUN if self.dry_run else CampaignOutcome.UPDATED
        )
        return sum(1 for r in self.results if r.outcome == counted)

    @property
    def updated_count(self) -> int:
        return sum(1 for r in self.results if r.outcome == CampaignOutcome.UPDATED)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if r.outcome == CampaignOutcome.FAILED)

    def abort(self, kind: RunErrorKind, message: str) -> "RunSummary":
        """Mark the run as aborted with the given error."""
        self.status = RunStatus.ABORTED
        self.error_kind = kind
        self.error_message = message
        return self
