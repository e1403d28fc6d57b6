from typing import Iterable, Tuple
from urllib.parse import quote, unquote, urlparse

def org_credentials_url(host: str, owner: str) -> str:
    """Build an organization-level URL (no repository path) for credential lookup."""
    return f"https://{host}/{quote(owner, safe='')}"

def parse_owner_url(url: str) -> Tuple[str, str]:
    """Split a GitHub URL into (host, owner)."""
    parsed = urlparse(url)
    segments = [s for s in parsed.path.split("/") if s]
    owner = unquote(segments[0]) if segments else ""
    return parsed.netloc, owner

def describe_error(error: BaseException) -> str:
    """Human-readable message for an exception, never empty."""
    return str(error) or "Unknown error"

def join_usernames(entries: Iterable) -> str:
    return ", ".join(entry.username for entry in entries)
