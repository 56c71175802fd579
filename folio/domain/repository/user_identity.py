"""User identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from folio.domain.model.user_identity import UserIdentity
from folio.domain.value import AuthProvider, UserId


class UserIdentityRepository(ABC):
    """Repository for UserIdentity entity.

    Manages the links between users and their OAuth provider accounts.
    """

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Find an identity by provider and provider user ID.

        Args:
            provider: The authentication provider
            provider_user_id: The user's ID on that provider

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """Get all identities linked to a user.

        Args:
            user_id: The user's unique identifier

        Returns:
            List of identities ordered by creation time (may be empty)
        """
        pass

    @abstractmethod
    async def create(self, identity: UserIdentity) -> UserIdentity:
        """Insert a new identity link.

        Args:
            identity: The identity to create

        Returns:
            The created identity

        Raises:
            ConflictError: If ``(provider, provider_user_id)`` is already linked
        """
        pass
