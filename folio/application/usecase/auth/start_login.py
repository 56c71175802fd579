"""Start login use case."""

import secrets

import logfire
from pydantic import BaseModel

from folio.domain.service import AuthService
from folio.domain.value import AuthProvider

from .error import InvalidProviderError


class StartLoginRequest(BaseModel):
    """Start login request.

    ``provider`` is the raw ``type`` query parameter.
    """

    provider: str | None = None


class StartLoginResponse(BaseModel):
    """Where to send the browser and what to remember until the callback."""

    authorization_url: str
    state: str
    provider: AuthProvider


class StartLoginUseCase:
    """Use case for beginning an OAuth login."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize start login use case.

        Args:
            auth_service: Authentication domain service (provider lookup)
        """
        self.auth_service = auth_service

    async def execute(self, request: StartLoginRequest) -> StartLoginResponse:
        """Pick the provider, mint a CSRF nonce and build the authorize URL.

        Args:
            request: Request with the provider key

        Returns:
            Authorization URL plus the state to store in the ``oauth_state`` cookie

        Raises:
            InvalidProviderError: If the provider is unknown or not configured
        """
        client = self.auth_service.get_client(request.provider)
        if client is None:
            logfire.warn(
                "Login requested for unavailable provider",
                provider=request.provider,
                available=self.auth_service.supported_providers(),
            )
            raise InvalidProviderError(request.provider)

        state = secrets.token_urlsafe(32)
        authorization_url = client.get_auth_url(state)

        logfire.info("OAuth login started", provider=client.provider.value)

        return StartLoginResponse(
            authorization_url=authorization_url,
            state=state,
            provider=client.provider,
        )
