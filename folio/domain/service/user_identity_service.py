"""User identity domain service."""

import logfire

from folio.domain.model.user_identity import UserIdentity
from folio.domain.repository.user_identity import UserIdentityRepository
from folio.domain.value import UserId


class UserIdentityService:
    """Domain service for reading identity links."""

    def __init__(self, user_identity_repository: UserIdentityRepository) -> None:
        """Initialize user identity service.

        Args:
            user_identity_repository: User identity repository
        """
        self.user_identity_repository = user_identity_repository

    async def get_all_identities_for_user(self, user_id: UserId) -> list[UserIdentity]:
        """Get all identities linked to a user.

        Args:
            user_id: User ID

        Returns:
            List of identities (may be empty)
        """
        with logfire.span(
            "user_identity_service.get_all_identities_for_user", user_id=str(user_id)
        ):
            identities = await self.user_identity_repository.find_all_by_user_id(
                user_id
            )
            logfire.info(
                "Identities retrieved for user",
                user_id=str(user_id),
                count=len(identities),
            )
            return identities
