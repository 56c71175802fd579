"""GitHub infrastructure providers."""

from dishka import Scope, provide

from folio.adapter.github import GitHubOAuthClient, RealGitHubOAuthClient
from folio.config import Settings
from folio.util.di.base import ProviderBase


class GitHubProvider(ProviderBase):
    """GitHub component base."""

    __mock_component__ = "github"


class ProdGitHubProvider(GitHubProvider):
    """Production GitHub provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_github_oauth_client(self, settings: Settings) -> GitHubOAuthClient:
        """Provide GitHub OAuth client.

        Missing credentials leave the client unconfigured, so GitHub is simply
        not offered at login. ``AUTH__GITHUB__ENABLED`` turns that into a
        startup error (see ``OAuthProviderSettings``).

        Returns:
            GitHub OAuth client
        """
        return RealGitHubOAuthClient(
            client_id=settings.auth.github.client_id,
            client_secret=settings.auth.github.client_secret,
            redirect_uri=settings.auth.oauth_callback_url,
            timeout=settings.auth.http_timeout_seconds,
        )
