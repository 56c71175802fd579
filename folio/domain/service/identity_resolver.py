"""Identity resolution domain service."""

from uuid import uuid4

import logfire

from folio.domain.error import ConflictError, InactiveUserError, NotFoundError
from folio.domain.model import User, UserIdentity
from folio.domain.repository import UserIdentityRepository, UserRepository
from folio.domain.value import OAuthProviderInfo, UserId, UserIdentityId, UserRole
from folio.domain.value.types import Username

from .base import Service


class IdentityResolver(Service):
    """Maps a verified provider profile to a local user account.

    Resolution order:

    1. An existing identity link for ``(provider, provider_user_id)``.
    2. An existing user with the same email, which gets a new link.
    3. A brand-new ``MEMBER`` user created together with its first link.

    Inactive users are rejected before any link is written.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        user_identity_repository: UserIdentityRepository,
    ) -> None:
        """Initialize identity resolver.

        Args:
            user_repository: User repository
            user_identity_repository: User identity repository
        """
        self.user_repository = user_repository
        self.user_identity_repository = user_identity_repository

    async def resolve(self, profile: OAuthProviderInfo) -> User:
        """Find or create the user behind a provider profile.

        A uniqueness conflict means a concurrent callback created the same
        user or link first; resolution is re-run once so this caller joins
        that account.

        Args:
            profile: Verified provider profile

        Returns:
            The active local user

        Raises:
            InactiveUserError: If the resolved user is deactivated
            NotFoundError: If a link points at a user that no longer exists
            ConflictError: If the conflict persists after re-reading
        """
        with logfire.span(
            "identity_resolver.resolve",
            provider=profile.provider.value,
            provider_user_id=profile.provider_user_id,
        ):
            try:
                return await self._resolve_once(profile)
            except ConflictError as e:
                logfire.info(
                    "Concurrent login detected, re-reading",
                    provider=profile.provider.value,
                    field=e.field,
                )
                return await self._resolve_once(profile)

    async def _resolve_once(self, profile: OAuthProviderInfo) -> User:
        identity = await self.user_identity_repository.find_by_provider(
            profile.provider, profile.provider_user_id
        )
        if identity:
            user = await self.user_repository.find_by_id(identity.user_id)
            if not user:
                logfire.error(
                    "Identity link points at a missing user",
                    identity_id=str(identity.id),
                    user_id=str(identity.user_id),
                )
                raise NotFoundError("User", str(identity.user_id))
            self._ensure_active(user)
            return user

        user = await self.user_repository.find_by_email(profile.email)
        if user:
            self._ensure_active(user)
            await self.user_identity_repository.create(
                self._new_identity(user.id, profile)
            )
            logfire.info(
                "Provider linked to existing account",
                user_id=str(user.id),
                provider=profile.provider.value,
            )
            return user

        user_id = UserId(uuid4())
        user = User(
            id=user_id,
            email=profile.email,
            username=Username(profile.username),
            role=UserRole.MEMBER,
            is_active=True,
        )
        created = await self.user_repository.create_with_identity(
            user, self._new_identity(user_id, profile)
        )
        logfire.info(
            "New user created",
            user_id=str(user_id),
            provider=profile.provider.value,
        )
        return created

    @staticmethod
    def _new_identity(user_id: UserId, profile: OAuthProviderInfo) -> UserIdentity:
        return UserIdentity(
            id=UserIdentityId(uuid4()),
            user_id=user_id,
            provider=profile.provider,
            provider_user_id=profile.provider_user_id,
        )

    @staticmethod
    def _ensure_active(user: User) -> None:
        if not user.is_active:
            logfire.warn("Inactive user attempted login", user_id=str(user.id))
            raise InactiveUserError(str(user.id))
