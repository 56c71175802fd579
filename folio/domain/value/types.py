"""Domain value objects for Folio.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from folio.domain.value.common import RootValueObject, ValueObject


class AuthProvider(str, Enum):
    """Supported OAuth providers.

    The value is the key used in ``/auth/oauth?type=...`` and in the
    ``oauth_state`` cookie.
    """

    GITHUB = "github"
    GOOGLE = "google"


class UserRole(str, Enum):
    """Role of a local account."""

    OWNER = "OWNER"
    MEMBER = "MEMBER"


class Username(RootValueObject[str]):
    """Display name taken from the provider profile on first login."""

    @field_validator("root")
    @classmethod
    def validate_username(cls, v: str) -> str:
        """Validate username is not blank and within length limits."""
        v = v.strip()
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Username must be 1-255 characters")
        return v


class OAuthProviderInfo(ValueObject):
    """Verified profile returned by a provider adapter.

    ``email`` is always a verified address; adapters refuse to build this
    object otherwise, because email is the cross-provider identity key.
    """

    provider: AuthProvider
    provider_user_id: str  # GitHub numeric id or Google sub
    email: str
    username: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Lower-case the address so linking is case-insensitive."""
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Provider returned an invalid email address")
        return v
