"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from folio.domain.service import UserIdentityService, UserService
from folio.domain.value import AuthProvider, UserId, UserRole


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    user_id: str  # From the authenticated session


class UserIdentityInfo(BaseModel):
    """Linked provider information for response."""

    provider: AuthProvider
    linked_at: datetime


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: str
    email: str
    username: str
    role: UserRole
    is_active: bool
    created_at: datetime
    identities: list[UserIdentityInfo]


class GetCurrentUserUseCase:
    """Use case for getting the authenticated user's own profile."""

    def __init__(
        self,
        user_service: UserService,
        user_identity_service: UserIdentityService,
    ) -> None:
        """Initialize get current user use case.

        Args:
            user_service: User domain service
            user_identity_service: User identity domain service
        """
        self.user_service = user_service
        self.user_identity_service = user_identity_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Args:
            request: Request with the session's user ID

        Returns:
            User information with linked providers

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_service.get_by_id(UserId(UUID(request.user_id)))

        identities = await self.user_identity_service.get_all_identities_for_user(
            user.id
        )

        return GetCurrentUserResponse(
            user_id=str(user.id),
            email=user.email,
            username=str(user.username),
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
            identities=[
                UserIdentityInfo(
                    provider=identity.provider,
                    linked_at=identity.created_at,
                )
                for identity in identities
            ],
        )
