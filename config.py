import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# GitHub integration configuration
GITHUB_HOST = os.getenv("GITHUB_HOST", "github.com")
GITHUB_API_BASE_URL = os.getenv("GITHUB_API_BASE_URL")
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN")

# GitHub App used to mint organization installation tokens
GITHUB_APP_ID = os.getenv("GITHUB_APP_ID")
GITHUB_APP_PRIVATE_KEY = os.getenv("GITHUB_APP_PRIVATE_KEY")
GITHUB_APP_PRIVATE_KEY_PATH = os.getenv("GITHUB_APP_PRIVATE_KEY_PATH")

# Optional YAML file with an `integrations.github` list, overrides the variables above
INTEGRATIONS_CONFIG_PATH = os.getenv("INTEGRATIONS_CONFIG_PATH")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Team actions always target github.com
DEFAULT_TEAM_HOST = "github.com"

# Remote API client settings
REQUEST_TIMEOUT = 60
TEAM_API_PREVIEWS = ["nebula-preview"]


def default_api_base_url(host: str) -> str:
    """API root for a GitHub host; Enterprise servers serve it under /api/v3."""
    if host == "github.com":
        return "https://api.github.com"
    return f"https://{host}/api/v3"
