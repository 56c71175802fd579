"""Google infrastructure providers."""

from dishka import Scope, provide

from folio.adapter.google import GoogleOAuthClient, RealGoogleOAuthClient
from folio.config import Settings
from folio.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide Google OAuth client.

        Returns:
            Google OAuth 2.0 client
        """
        return RealGoogleOAuthClient(
            client_id=settings.auth.google.client_id,
            client_secret=settings.auth.google.client_secret,
            redirect_uri=settings.auth.oauth_callback_url,
            timeout=settings.auth.http_timeout_seconds,
        )
