import logging
from unittest.mock import AsyncMock

import pytest

from integrations import ScmIntegrations
from models import GithubCredentials, GithubIntegrationConfig, TeamRecord


class FakeTeamsClient:
    """In-memory stand-in for GithubTeamsClient that records every call."""

    def __init__(self, team=None, create_error=None, membership_errors=None):
        self.team = team or TeamRecord(
            id=12345,
            slug="test-team",
            html_url="https://github.com/orgs/test-org/teams/test-team",
            name="test-team",
        )
        self.create_error = create_error
        self.membership_errors = membership_errors or {}
        self.create_calls = []
        self.membership_calls = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True

    async def create_team(self, org, name, description=None, privacy="closed"):
        self.create_calls.append({"org": org, "name": name, "description": description, "privacy": privacy})
        if self.create_error is not None:
            raise self.create_error
        return self.team

    async def add_or_update_membership(self, org, team_slug, username, role):
        self.membership_calls.append({"org": org, "team_slug": team_slug, "username": username, "role": role})
        error = self.membership_errors.get(username)
        if error is not None:
            raise error


class RecordingClientFactory:
    def __init__(self, client):
        self.client = client
        self.credentials = []

    def __call__(self, credential):
        self.credentials.append(credential)
        return self.client


@pytest.fixture
def integrations():
    return ScmIntegrations([
        GithubIntegrationConfig(host="github.com", apiBaseUrl="https://api.github.com"),
    ])


@pytest.fixture
def credentials_provider():
    provider = AsyncMock()
    provider.get_credentials.return_value = GithubCredentials(
        token="mock-github-token",
        headers={"Authorization": "Bearer mock-github-token"},
        type="app",
    )
    return provider


@pytest.fixture
def teams_client():
    return FakeTeamsClient()


@pytest.fixture
def client_factory(teams_client):
    return RecordingClientFactory(teams_client)


@pytest.fixture
def action_logger():
    return logging.getLogger("tests.action")
