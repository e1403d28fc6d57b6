import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from github import Auth, GithubIntegration
from github.GithubException import UnknownObjectException

from config import DEFAULT_TEAM_HOST
from errors import AuthenticationError, ConfigurationError, ErrorKind, ValidationError
from integrations import ScmIntegrations
from models import GithubAppConfig, GithubCredentials, GithubIntegrationConfig, ResolvedCredential
from utils import describe_error, org_credentials_url, parse_owner_url

logger = logging.getLogger(__name__)


class DefaultGithubCredentialsProvider:
    """Issue GitHub credentials for a URL.

    GitHub App installations on the URL's owner take precedence; when no
    configured app is installed there, the integration's static token (if any)
    is returned instead.
    """

    def __init__(self, integrations: ScmIntegrations):
        self._integrations = integrations

    @classmethod
    def from_integrations(cls, integrations: ScmIntegrations) -> "DefaultGithubCredentialsProvider":
        return cls(integrations)

    async def get_credentials(self, url: str) -> GithubCredentials:
        host, owner = parse_owner_url(url)
        integration = self._integrations.by_host(host)
        if integration is None:
            raise ConfigurationError(ErrorKind.INTEGRATION_NOT_FOUND, f"No integration for host {host}")

        for app in integration.apps:
            token = await run_in_threadpool(self._installation_token, integration, app, owner)
            if token:
                return GithubCredentials(
                    token=token,
                    headers={"Authorization": f"Bearer {token}"},
                    type="app",
                )

        token = integration.token
        return GithubCredentials(
            token=token,
            headers={"Authorization": f"Bearer {token}"} if token else {},
            type="token",
        )

    def _installation_token(self, integration: GithubIntegrationConfig, app: GithubAppConfig,
                            owner: str) -> Optional[str]:
        # Blocking PyGithub calls; run through the threadpool by get_credentials
        github_integration = GithubIntegration(
            auth=Auth.AppAuth(app.app_id, app.private_key),
            base_url=integration.api_base_url,
        )
        try:
            try:
                installation = github_integration.get_org_installation(owner)
            except UnknownObjectException:
                logger.info("GitHub App %s is not installed on %s", app.app_id, owner)
                return None
            logger.info("Issuing installation token for GitHub App %s on %s", app.app_id, owner)
            return github_integration.get_access_token(installation.id).token
        finally:
            github_integration.close()


async def resolve_org_credential(
    integrations: ScmIntegrations,
    owner: str,
    host: str = DEFAULT_TEAM_HOST,
    token: Optional[str] = None,
    credentials_provider=None,
) -> ResolvedCredential:
    """Resolve the bearer token for organization-level team operations.

    Unlike repository-scoped resolution this needs no repository: the
    credential request is scoped to ``https://<host>/<owner>`` so an app
    installed on the organization can be used.
    """
    integration = integrations.by_host(host)
    if integration is None:
        raise ConfigurationError(ErrorKind.INTEGRATION_NOT_FOUND, f"No integration for host {host}")

    if token:
        return ResolvedCredential(bearer_token=token, api_base_url=integration.api_base_url)

    if not owner:
        raise ValidationError(
            ErrorKind.MISSING_OWNER,
            "No organization/owner provided, which is required for GitHub App authentication",
        )

    provider = credentials_provider or DefaultGithubCredentialsProvider.from_integrations(integrations)
    try:
        credentials = await provider.get_credentials(org_credentials_url(host, owner))
    except Exception as e:
        raise AuthenticationError(ErrorKind.CREDENTIAL_PROVIDER_FAILURE, owner, describe_error(e)) from e

    if not credentials.token:
        raise AuthenticationError(
            ErrorKind.NO_TOKEN_AVAILABLE,
            owner,
            f"No token available for host: {host}, with owner {owner}. "
            "Make sure GitHub App is installed on the organization.",
        )

    return ResolvedCredential(bearer_token=credentials.token, api_base_url=integration.api_base_url)
