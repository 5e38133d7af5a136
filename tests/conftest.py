"""
Pytest configuration and fixtures for campaign-replace tests.

Provides a controllable clock for the rate limiter and retry policy, and
factories for campaigns, executors and orchestrators bound to a mock service.
"""

from typing import Any, Optional

import pytest
import structlog

from campaign_replace.execution.executor import RateLimitedRetryExecutor
from campaign_replace.execution.rate_limiter import RateLimiter, RateLimiterConfig
from campaign_replace.execution.retry import RetryConfig, RetryPolicy
from campaign_replace.models.campaign import Campaign
from campaign_replace.orchestrator.update_orchestrator import UpdateOrchestrator
from tests.mocks import FakeClock, MockCampaignService

# =============================
# Fixtures
# =============================


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore default structlog configuration after tests that configure it."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_campaign():
    """Factory for campaigns with content loaded."""

    def _make(
        campaign_id: int,
        html: Optional[str] = "",
        plain: Optional[str] = "",
        name: Optional[str] = None,
        **extra: Any,
    ) -> Campaign:
        return Campaign(
            id=campaign_id,
            name=name or f"Campaign {campaign_id}",
            html_content=html,
            plain_text_content=plain,
            **extra,
        )

    return _make


@pytest.fixture
def make_executor(fake_clock):
    """Factory for executors driven by the fake clock (no real waiting)."""

    def _make(
        limiter_config: Optional[RateLimiterConfig] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> RateLimitedRetryExecutor:
        return RateLimitedRetryExecutor(
            rate_limiter=RateLimiter(
                limiter_config or RateLimiterConfig(),
                clock=fake_clock,
                sleep=fake_clock.sleep,
            ),
            retry_policy=RetryPolicy(retry_config or RetryConfig(), sleep=fake_clock.sleep),
        )

    return _make


@pytest.fixture
def report_lines() -> list[str]:
    return []


@pytest.fixture
def make_orchestrator(make_executor, report_lines):
    """Factory binding an orchestrator to a given mock service."""

    def _make(
        service: MockCampaignService,
        limiter_config: Optional[RateLimiterConfig] = None,
        retry_config: Optional[RetryConfig] = None,
    ) -> UpdateOrchestrator:
        return UpdateOrchestrator(
            service_factory=lambda config: service,
            executor_factory=lambda: make_executor(limiter_config, retry_config),
            report=report_lines.append,
        )

    return _make


# =============================
# Pytest Configuration
# =============================


def pytest_configure(config):
    """
    Configure pytest with custom markers.
    """
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
