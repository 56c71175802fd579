"""In-memory user identity repository for testing."""

from typing import Optional

from folio.domain.error import ConflictError
from folio.domain.model.user_identity import UserIdentity
from folio.domain.repository.user_identity import UserIdentityRepository
from folio.domain.value import AuthProvider, UserId


class InMemoryUserIdentityRepository(UserIdentityRepository):
    """In-memory implementation of UserIdentityRepository for testing.

    Enforces the ``(provider, provider_user_id)`` uniqueness rule.
    """

    def __init__(self) -> None:
        self._identities: list[UserIdentity] = []

    async def create(self, identity: UserIdentity) -> UserIdentity:
        """Insert a new identity link."""
        if await self.find_by_provider(identity.provider, identity.provider_user_id):
            raise ConflictError("UserIdentity", "provider_identity")
        self._identities.append(identity)
        return identity

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Find user identity by provider and provider user ID."""
        for identity in self._identities:
            if (
                identity.provider == provider
                and identity.provider_user_id == provider_user_id
            ):
                return identity
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """Find all identities for a user."""
        matches = [i for i in self._identities if i.user_id == user_id]
        matches.sort(key=lambda i: i.created_at)
        return matches
