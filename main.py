import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from actions import ActionRegistry, create_github_team_create_action
from auth import DefaultGithubCredentialsProvider
from integrations import ScmIntegrations
from routes import router


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def register_actions(registry: ActionRegistry, integrations: ScmIntegrations) -> None:
    """Register the GitHub team actions into the scaffolder registry."""
    github_credentials_provider = DefaultGithubCredentialsProvider.from_integrations(integrations)
    registry.add_actions(
        create_github_team_create_action(
            integrations=integrations,
            github_credentials_provider=github_credentials_provider,
        )
    )


def create_app(integrations: Optional[ScmIntegrations] = None,
               registry: Optional[ActionRegistry] = None) -> FastAPI:
    if registry is None:
        registry = ActionRegistry()
        register_actions(registry, integrations or ScmIntegrations.from_config())

    app = FastAPI()

    # CORS middleware configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, replace with your frontend URL
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.actions = registry
    app.include_router(router)
    return app


configure_logging()

# Initialize FastAPI app
app = create_app()
