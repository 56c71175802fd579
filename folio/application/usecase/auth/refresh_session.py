"""Refresh session use case."""

from typing import Literal
from uuid import UUID

import logfire
from pydantic import BaseModel

from folio.domain.model import User
from folio.domain.service import TokenService, UserService
from folio.domain.value import UserId
from folio.util.jwt import JWTError, TokenExpiredError, TokenPair


class RefreshSessionRequest(BaseModel):
    """Refresh session request."""

    refresh_token: str | None = None


class RefreshSuccess(BaseModel):
    """A new token pair for a confirmed-active user."""

    outcome: Literal["success"] = "success"
    user: User
    tokens: TokenPair


class RefreshFailure(BaseModel):
    """Refresh refused; the caller must clear its credentials."""

    outcome: Literal["failure"] = "failure"
    reason: Literal["missing", "expired", "invalid", "inactive", "unavailable"]


RefreshResult = RefreshSuccess | RefreshFailure


class RefreshSessionUseCase:
    """Use case for minting a new token pair from a refresh token.

    Old refresh tokens stay valid until they expire; there is no rotation
    list to consult.
    """

    def __init__(self, token_service: TokenService, user_service: UserService) -> None:
        """Initialize refresh session use case.

        Args:
            token_service: JWT token domain service
            user_service: User domain service
        """
        self.token_service = token_service
        self.user_service = user_service

    async def execute(self, request: RefreshSessionRequest) -> RefreshResult:
        """Verify the refresh token and re-check the user before issuing.

        Unlike the access-token path, a failed user lookup refuses the
        refresh: a new pair is only issued for a user confirmed active.

        Args:
            request: Request with the refresh token

        Returns:
            ``RefreshSuccess`` with the new pair, or ``RefreshFailure``
        """
        if not request.refresh_token:
            return RefreshFailure(reason="missing")

        with logfire.span("refresh_session"):
            try:
                payload = self.token_service.verify_refresh_token(
                    request.refresh_token
                )
                user_id = UserId(UUID(payload.user_id))
            except TokenExpiredError:
                return RefreshFailure(reason="expired")
            except (JWTError, ValueError):
                logfire.warn("Invalid refresh token presented")
                return RefreshFailure(reason="invalid")

            try:
                user = await self.user_service.find_by_id(user_id)
            except Exception:
                logfire.exception("User lookup failed during refresh")
                return RefreshFailure(reason="unavailable")

            if user is None or not user.is_active:
                logfire.warn(
                    "Refresh refused for missing or inactive user",
                    user_id=str(user_id),
                )
                return RefreshFailure(reason="inactive")

            tokens = self.token_service.generate_tokens(str(user.id), user.email)
            return RefreshSuccess(user=user, tokens=tokens)
