"""Update orchestration for campaign find-and-replace runs."""

from campaign_replace.orchestrator.update_orchestrator import UpdateOrchestrator, parse_campaign_id

__all__ = ["UpdateOrchestrator", "parse_campaign_id"]
