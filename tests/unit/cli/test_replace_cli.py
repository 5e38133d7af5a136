"""
Unit tests for the campaign-replace CLI command.

Most tests replace the dotdigital client with MockCampaignService, so the
command runs end to end without network access. Host selection is checked
against the real client with mocked HTTP responses.
"""

import pytest
from click.testing import CliRunner
from pytest_httpx import HTTPXMock

from campaign_replace.cli import replace as cli_module
from campaign_replace.cli.replace import replace_command
from campaign_replace.dotdigital.result import ServiceResult
from campaign_replace.models.campaign import Campaign
from tests.mocks import MockCampaignService

CREDENTIALS = ["--username", "apiuser@apiconnector.com", "--password", "secret"]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def mock_service(monkeypatch):
    """Install a MockCampaignService in place of the dotdigital client."""
    created = {}

    def install(service: MockCampaignService) -> dict:
        def factory(username, password, base_url=None, **kwargs):
            created.update(username=username, password=password, base_url=base_url)
            return service

        monkeypatch.setattr(cli_module, "DotdigitalClient", factory)
        return created

    return install


class TestReplaceCommand:
    """Tests for the replace command."""

    def test_single_campaign_updated(self, runner, mock_service):
        # Arrange
        service = MockCampaignService(
            campaigns=[Campaign(id=42, name="Spring", html_content="Big SALE today")]
        )
        mock_service(service)

        # Act
        result = runner.invoke(
            replace_command,
            CREDENTIALS + ["--find", "SALE", "--replace", "CLEARANCE", "--campaign", "42"],
        )

        # Assert
        assert result.exit_code == 0, result.output
        assert "Finding text 'SALE' and replacing with 'CLEARANCE'" in result.output
        assert "Found 1 campaigns" in result.output
        assert "- updated - 42, Spring" in result.output
        assert "Finished" in result.output
        assert service.updated[0].html_content == "Big CLEARANCE today"

    def test_dry_run_all_campaigns(self, runner, mock_service):
        service = MockCampaignService(
            campaigns=[
                Campaign(id=1, name="One", html_content="SALE"),
                Campaign(id=2, name="Two", html_content="nothing"),
            ]
        )
        mock_service(service)

        result = runner.invoke(
            replace_command,
            CREDENTIALS
            + ["--find", "SALE", "--replace", "DEAL", "--all-campaigns", "--dry-run"],
        )

        assert result.exit_code == 0, result.output
        assert "Dry run is enabled, no campaigns will be updated" in result.output
        assert "1 with matching text, not updated" in result.output
        assert service.updated == []

    def test_empty_replacement_allowed(self, runner, mock_service):
        service = MockCampaignService(campaigns=[Campaign(id=3, html_content="Big SALE today")])
        mock_service(service)

        result = runner.invoke(
            replace_command,
            CREDENTIALS + ["--find", "SALE ", "--replace", "", "--campaign", "3"],
        )

        assert result.exit_code == 0, result.output
        assert service.updated[0].html_content == "Big today"

    def test_invalid_campaign_id_exits_non_zero(self, runner, mock_service):
        service = MockCampaignService()
        mock_service(service)

        result = runner.invoke(
            replace_command,
            CREDENTIALS + ["--find", "SALE", "--replace", "DEAL", "--campaign", "abc"],
        )

        assert result.exit_code == 1
        assert "Unable to parse [abc] for the campaign id" in result.output
        assert service.calls == []

    def test_both_selectors_rejected(self, runner, mock_service):
        service = MockCampaignService()
        mock_service(service)

        result = runner.invoke(
            replace_command,
            CREDENTIALS
            + ["--find", "SALE", "--replace", "DEAL", "--campaign", "1", "--all-campaigns"],
        )

        assert result.exit_code == 1
        assert "Only one of 'campaign' or 'all-campaigns' options should be set" in result.output

    def test_authentication_failure_exits_non_zero(self, runner, mock_service):
        service = MockCampaignService(
            account_result=ServiceResult.fail("Authorization has been denied for this request.")
        )
        mock_service(service)

        result = runner.invoke(
            replace_command,
            CREDENTIALS + ["--find", "SALE", "--replace", "DEAL", "--all-campaigns"],
        )

        assert result.exit_code == 1
        assert "Failed to get account info with error" in result.output
        assert "Check the username and password are correct" in result.output

    def test_api_url_and_env_credentials(self, runner, mock_service):
        created = mock_service(MockCampaignService(listing=[]))

        result = runner.invoke(
            replace_command,
            [
                "--find",
                "SALE",
                "--replace",
                "DEAL",
                "--all-campaigns",
                "--api-url",
                "https://r2-api.dotdigital.com",
            ],
            env={"DOTDIGITAL_USERNAME": "envuser", "DOTDIGITAL_PASSWORD": "envpass"},
        )

        assert result.exit_code == 0, result.output
        assert created == {
            "username": "envuser",
            "password": "envpass",
            "base_url": "https://r2-api.dotdigital.com",
        }

    def test_missing_find_is_usage_error(self, runner):
        result = runner.invoke(
            replace_command, CREDENTIALS + ["--replace", "DEAL", "--all-campaigns"]
        )

        assert result.exit_code == 2
        assert "--find" in result.output


class TestApiHostSelection:
    """Which API host the command talks to."""

    ACCOUNT_ON_R1 = {
        "id": 1001,
        "properties": [
            {"name": "ApiEndpoint", "type": "String", "value": "https://r1-api.dotdigital.com"}
        ],
    }

    def test_explicit_api_url_is_kept_after_verification(self, runner, httpx_mock: HTTPXMock):
        # Arrange: the account reports a different regional host
        host = "https://staging.example"
        httpx_mock.add_response(
            method="GET", url=f"{host}/v2/account-info", json=self.ACCOUNT_ON_R1
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{host}/v2/campaigns/42",
            json={"id": 42, "name": "Spring", "htmlContent": "Big SALE today"},
        )
        httpx_mock.add_response(
            method="PUT",
            url=f"{host}/v2/campaigns/42",
            json={"id": 42, "name": "Spring", "htmlContent": "Big CLEARANCE today"},
        )

        # Act
        result = runner.invoke(
            replace_command,
            CREDENTIALS
            + ["--find", "SALE", "--replace", "CLEARANCE", "--campaign", "42", "--api-url", host],
        )

        # Assert: every request, including the update, went to the chosen host
        assert result.exit_code == 0, result.output
        requests = httpx_mock.get_requests()
        assert [(r.method, r.url.host) for r in requests] == [
            ("GET", "staging.example"),
            ("GET", "staging.example"),
            ("PUT", "staging.example"),
        ]

    def test_default_host_follows_account_endpoint(
        self, runner, httpx_mock: HTTPXMock, monkeypatch
    ):
        monkeypatch.setattr(cli_module.settings, "api_base_url", "https://r2-api.dotdigital.com")
        httpx_mock.add_response(
            url="https://r2-api.dotdigital.com/v2/account-info", json=self.ACCOUNT_ON_R1
        )
        httpx_mock.add_response(
            url="https://r1-api.dotdigital.com/v2/campaigns/42",
            json={"id": 42, "name": "Spring", "htmlContent": "nothing to change"},
        )

        result = runner.invoke(
            replace_command,
            CREDENTIALS + ["--find", "SALE", "--replace", "CLEARANCE", "--campaign", "42"],
        )

        assert result.exit_code == 0, result.output
        assert [r.url.host for r in httpx_mock.get_requests()] == [
            "r2-api.dotdigital.com",
            "r1-api.dotdigital.com",
        ]
