"""Authentication flow errors and outcome codes."""

from enum import Enum


class InvalidProviderError(Exception):
    """Login was started for an unknown or unconfigured provider.

    Raised before any redirect happens, so it is rendered as a JSON error.
    """

    def __init__(self, provider: str | None):
        self.provider = provider
        super().__init__(f"Unsupported OAuth provider: {provider}")


class LoginErrorCode(str, Enum):
    """Machine-readable reason a callback failed.

    Sent to the frontend as ``/auth/error?message=<code>``.
    """

    INVALID_REQUEST = "invalid_request"
    INVALID_STATE = "invalid_state"
    INVALID_PROVIDER = "invalid_provider"
    ACCOUNT_INACTIVE = "account_inactive"
    OAUTH_FAILED = "oauth_failed"
