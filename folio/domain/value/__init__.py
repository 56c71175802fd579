"""Domain value objects for Folio."""

from folio.domain.value.identifiers import UserId, UserIdentityId
from folio.domain.value.types import (
    AuthProvider,
    OAuthProviderInfo,
    Username,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "UserIdentityId",
    # Types
    "AuthProvider",
    "OAuthProviderInfo",
    "Username",
    "UserRole",
]
