from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class TeamPrivacy(str, Enum):
    CLOSED = "closed"
    SECRET = "secret"


class MemberRole(str, Enum):
    MEMBER = "member"
    MAINTAINER = "maintainer"


class TeamMember(BaseModel):
    username: str = Field(description="GitHub username")
    role: Optional[MemberRole] = Field(default=None, description="Team role")

    @property
    def resolved_role(self) -> str:
        """Role to grant, falling back to plain membership."""
        return (self.role or MemberRole.MEMBER).value


class TeamCreateInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    organization: str = Field(description="GitHub organization name")
    team_name: str = Field(alias="teamName", description="Name of the team to create")
    description: Optional[str] = Field(default=None, description="Team description")
    privacy: Optional[TeamPrivacy] = Field(default=None, description="Team privacy level")
    members: Optional[List[TeamMember]] = Field(default=None, description="Team members to add")
    token: Optional[str] = Field(default=None, description="GitHub token (optional)")

    @property
    def resolved_privacy(self) -> str:
        return (self.privacy or TeamPrivacy.CLOSED).value


class TeamRecord(BaseModel):
    id: int
    slug: str
    html_url: str
    name: str


class MemberAdded(BaseModel):
    username: str
    role: str


class MemberFailed(BaseModel):
    username: str
    role: str
    error: str


class TeamCreateResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    team_id: int = Field(alias="teamId", description="Created team ID")
    team_url: str = Field(alias="teamUrl", description="Team URL")
    team_slug: str = Field(alias="teamSlug", description="Team slug")
    members_added: List[MemberAdded] = Field(
        alias="membersAdded", description="Successfully added team members"
    )
    members_failed: List[MemberFailed] = Field(
        alias="membersFailed", description="Failed team member additions with error details"
    )


class GithubAppConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    app_id: int = Field(alias="appId")
    private_key: str = Field(alias="privateKey")


class GithubIntegrationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    host: str
    api_base_url: str = Field(alias="apiBaseUrl")
    token: Optional[str] = None
    apps: List[GithubAppConfig] = Field(default_factory=list)


class GithubCredentials(BaseModel):
    token: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    type: str = "token"


class ResolvedCredential(BaseModel):
    bearer_token: str
    api_base_url: str
