"""In-memory user repository for testing."""

from typing import Optional

from folio.domain.error import ConflictError
from folio.domain.model.user import User
from folio.domain.model.user_identity import UserIdentity
from folio.domain.repository.user import UserRepository
from folio.domain.value import UserId

from .user_identity import InMemoryUserIdentityRepository


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    ``create_with_identity`` writes the link into the identity repository
    it shares with, so both sides see the same rows.
    """

    def __init__(
        self, identity_repository: InMemoryUserIdentityRepository | None = None
    ) -> None:
        self._users: dict[UserId, User] = {}
        self.identity_repository = (
            identity_repository or InMemoryUserIdentityRepository()
        )

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        email = email.lower()
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def create_with_identity(self, user: User, identity: UserIdentity) -> User:
        """Insert user and identity, or neither."""
        if await self.find_by_email(user.email):
            raise ConflictError("User", "email")
        if await self.identity_repository.find_by_provider(
            identity.provider, identity.provider_user_id
        ):
            raise ConflictError("User", "provider_identity")
        self._users[user.id] = user
        await self.identity_repository.create(identity)
        return user

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def list(self, offset: int = 0, limit: int = 20) -> list[User]:
        """List users in creation order."""
        users = sorted(self._users.values(), key=lambda u: u.created_at)
        return users[offset : offset + limit]

    async def count(self) -> int:
        """Count all users."""
        return len(self._users)
