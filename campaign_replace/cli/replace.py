"""
CLI command for finding and replacing text in dotdigital campaigns.

This module provides the `campaign-replace` command, which replaces literal text
in the HTML and plain-text content of one campaign or of every campaign in the
account.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import click
import structlog

from campaign_replace.config import settings
from campaign_replace.dotdigital.client import DotdigitalClient
from campaign_replace.execution.executor import RateLimitedRetryExecutor
from campaign_replace.models.run import RunConfig, RunSummary
from campaign_replace.orchestrator.update_orchestrator import UpdateOrchestrator

logger = structlog.get_logger(__name__)


def configure_logging(level: str) -> None:
    """
    Configure structlog for CLI use.

    Structured logs go to stderr so progress lines on stdout stay readable.
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


@click.command(name="campaign-replace")
@click.option(
    "--username",
    required=True,
    envvar="DOTDIGITAL_USERNAME",
    help="Dotdigital API username",
)
@click.option(
    "--password",
    required=True,
    envvar="DOTDIGITAL_PASSWORD",
    help="Dotdigital API password",
)
@click.option("--find", required=True, help="The text to find in the campaign")
@click.option("--replace", required=True, help="The text to replace in the campaign")
@click.option("--campaign", "campaign_id", default=None, help="Campaign id to be updated")
@click.option(
    "--all-campaigns",
    is_flag=True,
    default=False,
    help="All campaigns to be updated",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="No campaigns will be updated, only logged",
)
@click.option(
    "--api-url",
    default=None,
    help="Dotdigital API host (default: from settings)",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Structured log level on stderr (default: from settings)",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def replace_command(
    username,
    password,
    find,
    replace,
    campaign_id,
    all_campaigns,
    dry_run,
    api_url,
    log_level,
    verbose,
):
    """
    Tool for updating dotdigital campaigns.

    Finds literal text in campaign HTML and plain-text content and replaces it.
    Exactly one of --campaign or --all-campaigns must be given.

    Example:
        campaign-replace --username u --password p --find SALE --replace CLEARANCE --campaign 42

    All campaigns, without changing anything:
        campaign-replace --username u --password p --find SALE --replace CLEARANCE \\
            --all-campaigns --dry-run
    """
    configure_logging("DEBUG" if verbose else (log_level or settings.log_level).upper())
    logger.debug(
        "cli_started",
        campaign_id=campaign_id,
        all_campaigns=all_campaigns,
        dry_run=dry_run,
        api_url=api_url or settings.api_base_url,
    )

    config = RunConfig(
        username=username,
        password=password,
        find=find,
        replace=replace,
        campaign_id=campaign_id,
        all_campaigns=all_campaigns,
        dry_run=dry_run,
    )

    orchestrator = UpdateOrchestrator(
        # An explicit --api-url is never replaced by the account's regional host
        service_factory=lambda cfg: DotdigitalClient(
            cfg.username,
            cfg.password,
            base_url=api_url or settings.api_base_url,
            follow_api_endpoint=api_url is None,
        ),
        executor_factory=lambda: RateLimitedRetryExecutor.from_settings(settings),
        report=click.echo,
    )

    summary = run_replace(orchestrator, config)
    if summary.is_aborted:
        sys.exit(1)


def run_replace(orchestrator: UpdateOrchestrator, config: RunConfig) -> RunSummary:
    """Run the orchestrator to completion on a fresh event loop."""
    return asyncio.run(orchestrator.run(config))


def main():
    """Entry point for CLI."""
    replace_command()


if __name__ == "__main__":
    main()
