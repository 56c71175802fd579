"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from folio.domain.model.user import User
from folio.domain.model.user_identity import UserIdentity
from folio.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their (lower-cased) email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_with_identity(
        self, user: User, identity: UserIdentity
    ) -> User:
        """Insert a new user and its first identity link as one unit.

        Either both rows are written or neither is.

        Args:
            user: The user to create
            identity: The identity link pointing at ``user``

        Returns:
            The created user

        Raises:
            ConflictError: If the email or the provider identity already exists
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def list(self, offset: int = 0, limit: int = 20) -> list[User]:
        """List users ordered by creation time.

        Args:
            offset: Number of users to skip
            limit: Maximum number of users to return

        Returns:
            Users in creation order
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all users."""
        pass
