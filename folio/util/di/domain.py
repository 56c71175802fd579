"""Domain layer DI providers."""

from dishka import Scope, provide

from folio.config import AuthSettings
from folio.domain.repository import UserIdentityRepository, UserRepository
from folio.domain.service import (
    AuthService,
    IdentityResolver,
    OAuthClient,
    TokenService,
    UserIdentityService,
    UserService,
)
from folio.domain.value import AuthProvider
from folio.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide(scope=Scope.APP)
    def get_token_service(self, auth_settings: AuthSettings) -> TokenService:
        """Provide JWT token domain service (stateless, shared)."""
        return TokenService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_user_identity_service(
        self, user_identity_repository: UserIdentityRepository
    ) -> UserIdentityService:
        """Provide user identity domain service."""
        return UserIdentityService(user_identity_repository=user_identity_repository)

    @provide
    def get_identity_resolver(
        self,
        user_repository: UserRepository,
        user_identity_repository: UserIdentityRepository,
    ) -> IdentityResolver:
        """Provide identity resolver."""
        return IdentityResolver(
            user_repository=user_repository,
            user_identity_repository=user_identity_repository,
        )
