"""Google OAuth 2.0 client implementation."""

from urllib.parse import urlencode

import httpx
import logfire

from folio.adapter.error import NoVerifiedEmailError, OAuthExchangeFailedError
from folio.adapter.profile import display_name
from folio.domain.service.auth_service import OAuthClient
from folio.domain.value.types import AuthProvider, OAuthProviderInfo


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    provider = AuthProvider.GOOGLE


class RealGoogleOAuthClient(GoogleOAuthClient):
    """Google OAuth 2.0 web-server flow client."""

    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://www.googleapis.com/oauth2/v2/userinfo"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
    ) -> None:
        """Initialize Google OAuth client.

        Args:
            client_id: Google OAuth client ID
            client_secret: Google OAuth client secret
            redirect_uri: Callback URL registered with Google
            timeout: Per-request timeout in seconds
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.redirect_uri)

    def get_auth_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": "openid email profile",
            "state": state,
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        """Exchange authorization code for a Google access token.

        Raises:
            OAuthExchangeFailedError: If the exchange fails for any reason
        """
        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Accept": "application/json"},
                )

                if not response.is_success:
                    logfire.error(
                        "Google token exchange failed",
                        status_code=response.status_code,
                    )
                    raise OAuthExchangeFailedError(
                        "google", f"token endpoint returned {response.status_code}"
                    )

                result = response.json()
        except httpx.HTTPError as e:
            logfire.error("Google token exchange HTTP error", error=str(e))
            raise OAuthExchangeFailedError("google", f"HTTP error: {e}")
        except ValueError:
            raise OAuthExchangeFailedError("google", "token response is not JSON")

        access_token = result.get("access_token")
        if not access_token:
            logfire.error("Google token response has no access_token")
            raise OAuthExchangeFailedError("google", "no access_token in response")
        return access_token

    async def fetch_user_info(self, access_token: str) -> OAuthProviderInfo:
        """Fetch the Google profile.

        Raises:
            OAuthExchangeFailedError: If the userinfo call fails
            NoVerifiedEmailError: If the email is missing or unverified
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )

                if not response.is_success:
                    logfire.error(
                        "Google userinfo request failed",
                        status_code=response.status_code,
                    )
                    raise OAuthExchangeFailedError(
                        "google", f"userinfo returned {response.status_code}"
                    )

                user = response.json()
        except httpx.HTTPError as e:
            logfire.error("Google userinfo HTTP error", error=str(e))
            raise OAuthExchangeFailedError("google", f"HTTP error: {e}")
        except ValueError:
            raise OAuthExchangeFailedError("google", "userinfo is not JSON")

        if not user.get("email") or not user.get("verified_email"):
            logfire.warn("Google account has no verified email")
            raise NoVerifiedEmailError("google")

        if not user.get("id"):
            raise OAuthExchangeFailedError("google", "profile has no id")

        logfire.info("Google profile fetched", provider_user_id=str(user["id"]))

        return OAuthProviderInfo(
            provider=AuthProvider.GOOGLE,
            provider_user_id=str(user["id"]),
            email=user["email"],
            username=display_name(
                user.get("name"), user["email"].split("@")[0], user["email"]
            ),
        )


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for testing.

    Returns deterministic test data without making real API calls.
    """

    def __init__(self) -> None:
        """Initialize mock client without real OAuth configuration."""
        self.user_info = OAuthProviderInfo(
            provider=AuthProvider.GOOGLE,
            provider_user_id="google-456",
            email="alice@example.com",
            username="Alice G",
        )
        self.error: Exception | None = None
        self.exchanged_codes: list[str] = []

    def is_configured(self) -> bool:
        return True

    def get_auth_url(self, state: str) -> str:
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}&mock=true"

    async def exchange_code(self, code: str) -> str:
        self.exchanged_codes.append(code)
        if self.error is not None:
            raise self.error
        return f"mock-google-token-{code}"

    async def fetch_user_info(self, access_token: str) -> OAuthProviderInfo:
        if self.error is not None:
            raise self.error
        return self.user_info
