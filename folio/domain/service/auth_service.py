"""Authentication domain service."""

import logfire

from folio.domain.value.types import AuthProvider, OAuthProviderInfo

from .base import Service


class OAuthClient:
    """Capability interface implemented once per OAuth provider."""

    provider: AuthProvider

    def is_configured(self) -> bool:
        """Whether client id, client secret and callback URL are all set."""
        raise NotImplementedError

    def get_auth_url(self, state: str) -> str:
        """Build the provider's authorize URL.

        Args:
            state: CSRF nonce to round-trip through the provider

        Returns:
            Authorization URL to redirect the browser to
        """
        raise NotImplementedError

    async def exchange_code(self, code: str) -> str:
        """Exchange an authorization code for a provider access token.

        Args:
            code: Authorization code from the OAuth callback

        Returns:
            Provider access token (never leaves the backend)

        Raises:
            OAuthExchangeFailedError: If the provider rejects the code or is unreachable
        """
        raise NotImplementedError

    async def fetch_user_info(self, access_token: str) -> OAuthProviderInfo:
        """Fetch the verified profile for a provider access token.

        Args:
            access_token: Provider access token from ``exchange_code``

        Returns:
            Verified provider profile

        Raises:
            OAuthExchangeFailedError: If the profile cannot be fetched
            NoVerifiedEmailError: If the account has no verified primary email
        """
        raise NotImplementedError


class AuthService(Service):
    """Single lookup point from a provider key to its OAuth client.

    The set of providers is closed (see ``AuthProvider``); routes never
    branch on provider names themselves.
    """

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def get_client(self, provider: str | None) -> OAuthClient | None:
        """Look up a configured OAuth client by key.

        Args:
            provider: Provider key such as ``"github"`` (case-insensitive)

        Returns:
            The client, or None if the key is unknown or the provider has
            no credentials
        """
        if not provider:
            return None

        try:
            key = AuthProvider(provider.lower())
        except ValueError:
            logfire.warn("Unknown OAuth provider requested", provider=provider)
            return None

        client = self.oauth_clients.get(key)
        if client is None or not client.is_configured():
            logfire.warn("OAuth provider not configured", provider=key.value)
            return None
        return client

    def supported_providers(self) -> list[str]:
        """Keys of all providers that can currently be used to log in."""
        return [
            provider.value
            for provider, client in self.oauth_clients.items()
            if client.is_configured()
        ]
