"""
Mock adapters for testing.

This module provides mock implementations of external dependencies
to enable fast, reliable, and isolated testing without external API calls.
"""

from tests.mocks.mock_campaign_service import FakeClock, MockCampaignService

__all__ = ["FakeClock", "MockCampaignService"]
