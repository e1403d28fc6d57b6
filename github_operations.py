"""GitHub team operations over the REST API.

The team endpoints are called with httpx rather than PyGithub because they
must be requested with the nebula-preview media type, and PyGithub sends its
own Accept header. Error bodies are therefore parsed here into GithubApiError.
"""
import logging
from typing import List, Optional, Sequence, Tuple, Union
from urllib.parse import quote

import httpx

from config import REQUEST_TIMEOUT, TEAM_API_PREVIEWS
from errors import TeamCreationError
from models import MemberAdded, MemberFailed, ResolvedCredential, TeamCreateInput, TeamMember, TeamRecord
from utils import describe_error, join_usernames

MemberOutcome = Union[MemberAdded, MemberFailed]


class GithubApiError(Exception):
    """Non-2xx response from the GitHub REST API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        details = [
            error["message"] for error in data.get("errors") or []
            if isinstance(error, dict) and error.get("message")
        ]
        if details:
            return f"{data['message']}: {'; '.join(details)}"
        return data["message"]
    return response.reason_phrase or f"HTTP {response.status_code}"


class GithubTeamsClient:
    """Thin async client for the organization team endpoints."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def __aenter__(self) -> "GithubTeamsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Optional[dict]:
        response = await self._http.request(method, path, **kwargs)
        if response.is_error:
            raise GithubApiError(response.status_code, _error_message(response))
        if not response.content:
            return None
        return response.json()

    async def create_team(self, org: str, name: str, description: Optional[str] = None,
                          privacy: str = "closed") -> TeamRecord:
        payload = {"name": name, "privacy": privacy}
        if description is not None:
            payload["description"] = description
        data = await self._request("POST", f"/orgs/{quote(org, safe='')}/teams", json=payload)
        return TeamRecord.model_validate(data)

    async def add_or_update_membership(self, org: str, team_slug: str, username: str, role: str) -> None:
        path = (f"/orgs/{quote(org, safe='')}/teams/{quote(team_slug, safe='')}"
                f"/memberships/{quote(username, safe='')}")
        await self._request("PUT", path, json={"role": role})


def create_github_client(credential: ResolvedCredential,
                         transport: Optional[httpx.AsyncBaseTransport] = None) -> GithubTeamsClient:
    """Create a client bound to one resolved credential."""
    accept = ", ".join(f"application/vnd.github.{preview}+json" for preview in TEAM_API_PREVIEWS)
    http = httpx.AsyncClient(
        base_url=credential.api_base_url,
        headers={
            "Authorization": f"Bearer {credential.bearer_token}",
            "Accept": accept,
        },
        timeout=REQUEST_TIMEOUT,
        transport=transport,
    )
    return GithubTeamsClient(http)


async def create_team(client: GithubTeamsClient, request: TeamCreateInput,
                      logger: logging.Logger) -> TeamRecord:
    """Create the team; any failure is terminal for the invocation."""
    logger.info("Creating team with privacy: %s", request.resolved_privacy)
    try:
        team = await client.create_team(
            request.organization,
            request.team_name,
            description=request.description,
            privacy=request.resolved_privacy,
        )
    except Exception as e:
        logger.error("Failed to create GitHub team: %s", e)
        raise TeamCreationError(describe_error(e)) from e

    logger.info("Team created successfully: %s (ID: %s)", team.name, team.id)
    return team


async def _grant_membership(client: GithubTeamsClient, organization: str, team_slug: str,
                            member: TeamMember, logger: logging.Logger) -> MemberOutcome:
    role = member.resolved_role
    try:
        await client.add_or_update_membership(organization, team_slug, member.username, role)
    except Exception as e:
        logger.warning("Failed to add member %s: %s", member.username, e)
        return MemberFailed(username=member.username, role=role, error=describe_error(e))
    logger.info("Added %s as %s", member.username, role)
    return MemberAdded(username=member.username, role=role)


async def add_team_members(client: GithubTeamsClient, organization: str, team_slug: str,
                           members: Optional[Sequence[TeamMember]],
                           logger: logging.Logger) -> Tuple[List[MemberAdded], List[MemberFailed]]:
    """Grant team membership to each member in order.

    One member's failure never stops the others; outcomes are partitioned into
    (added, failed), each keeping input order.
    """
    if not members:
        return [], []

    logger.info("Adding %d members to the team", len(members))
    outcomes = []
    for member in members:
        outcomes.append(await _grant_membership(client, organization, team_slug, member, logger))

    added = [outcome for outcome in outcomes if isinstance(outcome, MemberAdded)]
    failed = [outcome for outcome in outcomes if isinstance(outcome, MemberFailed)]

    if added:
        logger.info("Successfully added %d members: %s", len(added), join_usernames(added))
    if failed:
        logger.warning("Failed to add %d members: %s", len(failed), join_usernames(failed))
    return added, failed
