"""OAuth infrastructure provider for multi-provider authentication."""

from dishka import Scope, provide

from folio.adapter.github import GitHubOAuthClient
from folio.adapter.google import GoogleOAuthClient
from folio.domain.service.auth_service import OAuthClient
from folio.domain.value import AuthProvider
from folio.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates all OAuth clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        github_oauth_client: GitHubOAuthClient,
        google_oauth_client: GoogleOAuthClient,
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide dictionary of all OAuth clients by provider.

        This is the single lookup table ``AuthService`` selects from.

        Args:
            github_oauth_client: GitHub OAuth client (specific type)
            google_oauth_client: Google OAuth client (specific type)

        Returns:
            Dictionary mapping AuthProvider to OAuthClient
        """
        return {
            AuthProvider.GITHUB: github_oauth_client,
            AuthProvider.GOOGLE: google_oauth_client,
        }
