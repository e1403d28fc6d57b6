import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml

import config
from models import GithubAppConfig, GithubIntegrationConfig

logger = logging.getLogger(__name__)


class ScmIntegrations:
    """Registry of configured GitHub integrations, keyed by host."""

    def __init__(self, github: Iterable[GithubIntegrationConfig] = ()):
        self._github: Dict[str, GithubIntegrationConfig] = {}
        for integration in github:
            self._github[integration.host] = integration

    def by_host(self, host: str) -> Optional[GithubIntegrationConfig]:
        return self._github.get(host)

    @property
    def github(self) -> List[GithubIntegrationConfig]:
        return list(self._github.values())

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "ScmIntegrations":
        """Build the registry from an app-config style mapping."""
        entries = ((data or {}).get("integrations") or {}).get("github") or []
        integrations = []
        for entry in entries:
            host = entry.get("host", "github.com")
            integrations.append(GithubIntegrationConfig(
                host=host,
                apiBaseUrl=entry.get("apiBaseUrl") or config.default_api_base_url(host),
                token=entry.get("token"),
                apps=[GithubAppConfig.model_validate(app) for app in entry.get("apps") or []],
            ))
        return cls(integrations)

    @classmethod
    def from_file(cls, path: str) -> "ScmIntegrations":
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        integrations = cls.from_dict(data)
        logger.info("Loaded %d GitHub integration(s) from %s", len(integrations.github), path)
        return integrations

    @classmethod
    def from_env(cls) -> "ScmIntegrations":
        """Build a single integration from the process environment."""
        host = config.GITHUB_HOST
        apps = []
        private_key = config.GITHUB_APP_PRIVATE_KEY
        if not private_key and config.GITHUB_APP_PRIVATE_KEY_PATH:
            private_key = Path(config.GITHUB_APP_PRIVATE_KEY_PATH).read_text(encoding="utf-8")
        if config.GITHUB_APP_ID and private_key:
            apps.append(GithubAppConfig(appId=int(config.GITHUB_APP_ID), privateKey=private_key))
        return cls([GithubIntegrationConfig(
            host=host,
            apiBaseUrl=config.GITHUB_API_BASE_URL or config.default_api_base_url(host),
            token=config.GITHUB_TOKEN,
            apps=apps,
        )])

    @classmethod
    def from_config(cls) -> "ScmIntegrations":
        if config.INTEGRATIONS_CONFIG_PATH:
            return cls.from_file(config.INTEGRATIONS_CONFIG_PATH)
        return cls.from_env()
