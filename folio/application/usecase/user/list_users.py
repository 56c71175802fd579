"""List users use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel, Field

from folio.domain.service import UserService
from folio.domain.value import UserRole


class UserListItem(BaseModel):
    """User list item in response."""

    user_id: str
    email: str
    username: str
    role: UserRole
    is_active: bool
    created_at: datetime


class ListUsersRequest(BaseModel):
    """List users request."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class ListUsersResponse(BaseModel):
    """List users response."""

    users: list[UserListItem]
    total: int
    page: int
    limit: int
    total_pages: int


class ListUsersUseCase:
    """Use case for the owner's paginated user list."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize list users use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        with logfire.span(
            "list_users.execute", page=request.page, limit=request.limit
        ):
            users, total = await self.user_service.list_users(
                request.page, request.limit
            )

            return ListUsersResponse(
                users=[
                    UserListItem(
                        user_id=str(user.id),
                        email=user.email,
                        username=str(user.username),
                        role=user.role,
                        is_active=user.is_active,
                        created_at=user.created_at,
                    )
                    for user in users
                ],
                total=total,
                page=request.page,
                limit=request.limit,
                total_pages=(total + request.limit - 1) // request.limit,
            )
