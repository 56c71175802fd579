"""Application layer DI providers."""

from dishka import Scope, provide

from folio.application.usecase.auth import (
    AuthenticateUseCase,
    CompleteLoginUseCase,
    RefreshSessionUseCase,
    StartLoginUseCase,
)
from folio.application.usecase.user import GetCurrentUserUseCase, ListUsersUseCase
from folio.domain.service import (
    AuthService,
    IdentityResolver,
    TokenService,
    UserIdentityService,
    UserService,
)
from folio.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_start_login_use_case(self, auth_service: AuthService) -> StartLoginUseCase:
        """Provide start login use case."""
        return StartLoginUseCase(auth_service=auth_service)

    @provide(scope=Scope.REQUEST)
    def get_complete_login_use_case(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        token_service: TokenService,
    ) -> CompleteLoginUseCase:
        """Provide complete login use case."""
        return CompleteLoginUseCase(
            auth_service=auth_service,
            identity_resolver=identity_resolver,
            token_service=token_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_refresh_session_use_case(
        self, token_service: TokenService, user_service: UserService
    ) -> RefreshSessionUseCase:
        """Provide refresh session use case."""
        return RefreshSessionUseCase(
            token_service=token_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_authenticate_use_case(
        self,
        token_service: TokenService,
        user_service: UserService,
        refresh_session: RefreshSessionUseCase,
    ) -> AuthenticateUseCase:
        """Provide session gate use case."""
        return AuthenticateUseCase(
            token_service=token_service,
            user_service=user_service,
            refresh_session=refresh_session,
        )

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, user_service: UserService, user_identity_service: UserIdentityService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            user_service=user_service, user_identity_service=user_identity_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(self, user_service: UserService) -> ListUsersUseCase:
        """Provide list users use case."""
        return ListUsersUseCase(user_service=user_service)
