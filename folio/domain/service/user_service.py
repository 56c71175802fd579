"""User domain service."""

import logfire

from folio.domain.error import NotFoundError
from folio.domain.model import User
from folio.domain.repository import UserRepository
from folio.domain.value import UserId


class UserService:
    """Domain service for user operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def find_by_id(self, user_id: UserId) -> User | None:
        """Get user by ID, returning None when absent.

        Persistence errors propagate so callers can tell "gone" from
        "database unavailable".
        """
        return await self.user_repository.find_by_id(user_id)

    async def list_users(self, page: int, limit: int) -> tuple[list[User], int]:
        """List one page of users.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (users on the page, total user count)
        """
        with logfire.span("user_service.list_users", page=page, limit=limit):
            offset = (page - 1) * limit
            users = await self.user_repository.list(offset=offset, limit=limit)
            total = await self.user_repository.count()
            return users, total
