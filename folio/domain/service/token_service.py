"""JWT token domain service."""

from datetime import timedelta

import logfire

from folio.config import AuthSettings
from folio.util.jwt import (
    JWTError,
    TokenPair,
    TokenPayload,
    create_token,
    verify_token,
)

from .base import Service


class TokenService(Service):
    """Issues and verifies access/refresh token pairs.

    Access and refresh tokens carry the same claims but are signed with two
    independent secrets, so one can never be replayed as the other. The
    service keeps no state beyond the settings it was built with.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize token service.

        Args:
            auth_settings: Authentication settings (secrets are validated at boot)
        """
        self.auth_settings = auth_settings

    def generate_tokens(self, user_id: str, email: str) -> TokenPair:
        """Create a fresh access/refresh pair for the user.

        Args:
            user_id: User ID
            email: User email

        Returns:
            New token pair
        """
        with logfire.span("token_service.generate_tokens", user_id=user_id):
            settings = self.auth_settings
            access_token = create_token(
                user_id,
                email,
                secret=settings.jwt_secret,
                expires_in=timedelta(minutes=settings.access_token_ttl_minutes),
                algorithm=settings.jwt_algorithm,
            )
            refresh_token = create_token(
                user_id,
                email,
                secret=settings.jwt_refresh_secret,
                expires_in=timedelta(days=settings.refresh_token_ttl_days),
                algorithm=settings.jwt_algorithm,
            )
            logfire.info("Token pair issued", user_id=user_id)
            return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def verify_access_token(self, token: str) -> TokenPayload:
        """Verify an access token.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is malformed or forged
        """
        return self._verify(token, self.auth_settings.jwt_secret, "access")

    def verify_refresh_token(self, token: str) -> TokenPayload:
        """Verify a refresh token.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is malformed or forged
        """
        return self._verify(token, self.auth_settings.jwt_refresh_secret, "refresh")

    def _verify(self, token: str, secret: str, kind: str) -> TokenPayload:
        with logfire.span("token_service.verify", kind=kind):
            try:
                payload = verify_token(token, secret, self.auth_settings.jwt_algorithm)
            except JWTError as e:
                logfire.debug("Token verification failed", kind=kind, error=str(e))
                raise
            return payload
