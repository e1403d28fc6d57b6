import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from auth import resolve_org_credential
from config import DEFAULT_TEAM_HOST
from errors import ErrorKind, TeamActionError, ValidationError
from github_operations import add_team_members, create_github_client, create_team
from integrations import ScmIntegrations
from models import TeamCreateInput, TeamCreateResult


@dataclass
class ActionContext:
    """What an action handler sees of the invocation that runs it."""
    input: Dict[str, Any]
    logger: logging.Logger
    output: Callable[[str, Any], None]


class TemplateAction:
    def __init__(self, id: str, description: str, input_model: Type[BaseModel],
                 output_model: Type[BaseModel], handler: Callable[[ActionContext], Awaitable[Any]]):
        self.id = id
        self.description = description
        self.input_model = input_model
        self.output_model = output_model
        self.handler = handler

    @property
    def schema(self) -> Dict[str, dict]:
        return {
            "input": self.input_model.model_json_schema(by_alias=True),
            "output": self.output_model.model_json_schema(by_alias=True),
        }


class ActionRegistry:
    def __init__(self):
        self._actions: Dict[str, TemplateAction] = {}

    def add_actions(self, *actions: TemplateAction) -> None:
        for action in actions:
            if action.id in self._actions:
                raise ValueError(f"Action '{action.id}' is already registered")
            self._actions[action.id] = action

    def get(self, action_id: str) -> TemplateAction:
        return self._actions[action_id]

    def list(self) -> List[TemplateAction]:
        return list(self._actions.values())


async def run_action(action: TemplateAction, input: Dict[str, Any],
                     logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """Run an action and collect its named outputs in emission order."""
    outputs: Dict[str, Any] = {}

    def output(name: str, value: Any) -> None:
        outputs[name] = value

    ctx = ActionContext(
        input=input or {},
        logger=logger or logging.getLogger(f"scaffolder.action.{action.id}"),
        output=output,
    )
    await action.handler(ctx)
    return outputs


def validate_team_input(raw: Dict[str, Any]) -> TeamCreateInput:
    """Reject incomplete input before any credential or network activity."""
    if not raw.get("organization"):
        raise ValidationError(ErrorKind.MISSING_FIELD, "Organization name is required but was not provided")
    try:
        return TeamCreateInput.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(ErrorKind.INVALID_FIELD, f"Invalid input: {e}") from e


def report_result(ctx: ActionContext, result: TeamCreateResult) -> None:
    # Output order is part of the action contract
    ctx.output("teamId", result.team_id)
    ctx.output("teamUrl", result.team_url)
    ctx.output("teamSlug", result.team_slug)
    ctx.output("membersAdded", [member.model_dump() for member in result.members_added])
    ctx.output("membersFailed", [member.model_dump() for member in result.members_failed])


def create_github_team_create_action(integrations: ScmIntegrations, github_credentials_provider=None,
                                     client_factory=create_github_client) -> TemplateAction:
    """Build the `github:team:create` action.

    Without an injected credentials provider, organization credentials come
    from the default provider built over ``integrations``.
    """

    async def handler(ctx: ActionContext) -> TeamCreateResult:
        ctx.logger.info("Creating GitHub team: %s in organization: %s",
                        ctx.input.get("teamName"), ctx.input.get("organization"))
        request = validate_team_input(ctx.input)

        ctx.logger.info("Getting GitHub credentials for organization: %s", request.organization)
        ctx.logger.info("GitHub credentials provider available: %s", github_credentials_provider is not None)
        ctx.logger.info("User provided token: %s", bool(request.token))
        try:
            credential = await resolve_org_credential(
                integrations,
                request.organization,
                host=DEFAULT_TEAM_HOST,
                token=request.token,
                credentials_provider=github_credentials_provider,
            )
        except TeamActionError as e:
            ctx.logger.error("Failed to get GitHub credentials for organization: %s", e)
            raise
        ctx.logger.info("Successfully obtained GitHub credentials")

        async with client_factory(credential) as client:
            team = await create_team(client, request, ctx.logger)
            added, failed = await add_team_members(
                client, request.organization, team.slug, request.members, ctx.logger
            )

        result = TeamCreateResult(
            teamId=team.id,
            teamUrl=team.html_url,
            teamSlug=team.slug,
            membersAdded=added,
            membersFailed=failed,
        )
        report_result(ctx, result)
        ctx.logger.info("GitHub team creation completed successfully")
        return result

    return TemplateAction(
        id="github:team:create",
        description="Creates a GitHub team in an organization",
        input_model=TeamCreateInput,
        output_model=TeamCreateResult,
        handler=handler,
    )
