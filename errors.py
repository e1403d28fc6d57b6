from enum import Enum


class ErrorKind(str, Enum):
    MISSING_FIELD = "MissingField"
    INVALID_FIELD = "InvalidField"
    MISSING_OWNER = "MissingOwner"
    INTEGRATION_NOT_FOUND = "IntegrationNotFound"
    NO_TOKEN_AVAILABLE = "NoTokenAvailable"
    CREDENTIAL_PROVIDER_FAILURE = "CredentialProviderFailure"
    REMOTE_FAILURE = "RemoteFailure"


class TeamActionError(Exception):
    """Base class for errors that abort a team action invocation."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class ValidationError(TeamActionError):
    """Caller input is missing or invalid. Raised before any network activity."""


class ConfigurationError(TeamActionError):
    """The integration configuration has no entry for the target host."""


class AuthenticationError(TeamActionError):
    """Credential resolution failed for an organization."""

    def __init__(self, kind: ErrorKind, organization: str, detail: str):
        super().__init__(
            kind,
            f"Failed to authenticate with GitHub for organization '{organization}': {detail}",
        )
        self.organization = organization
        self.detail = detail


class TeamCreationError(TeamActionError):
    """The remote create-team call failed."""

    def __init__(self, detail: str):
        super().__init__(ErrorKind.REMOTE_FAILURE, f"GitHub team creation failed: {detail}")
        self.detail = detail
