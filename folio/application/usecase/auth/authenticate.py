"""Authenticate request use case (session gate)."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from folio.domain.service import TokenService, UserService
from folio.domain.value import UserId, UserRole
from folio.util.jwt import InvalidTokenError, TokenExpiredError, TokenPair

from .refresh_session import (
    RefreshSessionRequest,
    RefreshSessionUseCase,
    RefreshSuccess,
)


class CurrentUser(BaseModel):
    """Identity attached to an authenticated request.

    ``role`` is None when the live user record could not be read and the
    identity comes from token claims alone.
    """

    user_id: str
    email: str
    role: UserRole | None = None

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER


class AuthenticateRequest(BaseModel):
    """Credentials taken from the request transport."""

    access_token: str | None = None
    refresh_token: str | None = None


class AuthenticationResult(BaseModel):
    """Outcome of the session gate.

    ``tokens`` is set when a transparent refresh happened and the new pair
    must be sent back. ``clear_credentials`` asks the caller to drop the
    stale cookies.
    """

    user: CurrentUser | None = None
    tokens: TokenPair | None = None
    clear_credentials: bool = False

    @property
    def authenticated(self) -> bool:
        return self.user is not None


class AuthenticateUseCase:
    """Use case for authenticating a single request.

    Never raises for bad credentials; the route dependency decides whether
    an unauthenticated result is a 401 or a null identity.
    """

    def __init__(
        self,
        token_service: TokenService,
        user_service: UserService,
        refresh_session: RefreshSessionUseCase,
    ) -> None:
        """Initialize authenticate use case.

        Args:
            token_service: JWT token domain service
            user_service: User domain service
            refresh_session: Refresh use case for expired access tokens
        """
        self.token_service = token_service
        self.user_service = user_service
        self.refresh_session = refresh_session

    async def execute(self, request: AuthenticateRequest) -> AuthenticationResult:
        """Execute the session gate.

        Steps:
        1. No credentials: unauthenticated
        2. No access token but a refresh token: refresh
        3. Valid access token: live user lookup (claims on lookup failure)
        4. Expired access token: refresh if a refresh token is present
        5. Invalid access token: warn, clear credentials

        Args:
            request: Request with the access and refresh tokens

        Returns:
            Authentication result
        """
        if not request.access_token:
            if request.refresh_token:
                return await self._refresh(request.refresh_token)
            return AuthenticationResult()

        try:
            payload = self.token_service.verify_access_token(request.access_token)
            user_id = UserId(UUID(payload.user_id))
        except TokenExpiredError:
            if request.refresh_token:
                return await self._refresh(request.refresh_token)
            return AuthenticationResult(clear_credentials=True)
        except (InvalidTokenError, ValueError):
            logfire.warn("Invalid access token presented")
            return AuthenticationResult(clear_credentials=True)

        try:
            user = await self.user_service.find_by_id(user_id)
        except Exception as e:
            logfire.warn(
                "Live user lookup failed, using token claims",
                user_id=payload.user_id,
                error=str(e),
            )
            return AuthenticationResult(
                user=CurrentUser(user_id=payload.user_id, email=payload.email)
            )

        if user is None or not user.is_active:
            logfire.warn(
                "Access token for missing or inactive user", user_id=payload.user_id
            )
            return AuthenticationResult(clear_credentials=True)

        return AuthenticationResult(
            user=CurrentUser(user_id=str(user.id), email=user.email, role=user.role)
        )

    async def _refresh(self, refresh_token: str) -> AuthenticationResult:
        outcome = await self.refresh_session.execute(
            RefreshSessionRequest(refresh_token=refresh_token)
        )
        if not isinstance(outcome, RefreshSuccess):
            return AuthenticationResult(clear_credentials=True)

        user = outcome.user
        logfire.info("Session refreshed transparently", user_id=str(user.id))
        return AuthenticationResult(
            user=CurrentUser(user_id=str(user.id), email=user.email, role=user.role),
            tokens=outcome.tokens,
        )
