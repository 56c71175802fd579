"""GitHub OAuth 2.0 client implementation."""

from urllib.parse import urlencode

import httpx
import logfire

from folio.adapter.error import NoVerifiedEmailError, OAuthExchangeFailedError
from folio.adapter.profile import display_name
from folio.domain.service.auth_service import OAuthClient
from folio.domain.value.types import AuthProvider, OAuthProviderInfo


class GitHubOAuthClient(OAuthClient):
    """Base class for GitHub OAuth clients.

    Provides type distinction for dependency injection.
    """

    provider = AuthProvider.GITHUB


class RealGitHubOAuthClient(GitHubOAuthClient):
    """GitHub OAuth app client.

    GitHub returns the profile and the email list from two endpoints; only
    an address that is both primary and verified is accepted.
    """

    authorize_url = "https://github.com/login/oauth/authorize"
    token_url = "https://github.com/login/oauth/access_token"
    user_url = "https://api.github.com/user"
    emails_url = "https://api.github.com/user/emails"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
    ) -> None:
        """Initialize GitHub OAuth client.

        Args:
            client_id: GitHub OAuth app client ID
            client_secret: GitHub OAuth app client secret
            redirect_uri: Callback URL registered with GitHub
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
            "scope": "user:email",
            "state": state,
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> str:
        """Exchange authorization code for a GitHub access token.

        GitHub answers 200 with an ``error`` field for bad codes, so the body
        is checked as well as the status.

        Raises:
            OAuthExchangeFailedError: If the exchange fails for any reason
        """
        payload = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.token_url,
                    json=payload,
                    headers={"Accept": "application/json"},
                )

                if not response.is_success:
                    logfire.error(
                        "GitHub token exchange failed",
                        status_code=response.status_code,
                    )
                    raise OAuthExchangeFailedError(
                        "github", f"token endpoint returned {response.status_code}"
                    )

                result = response.json()
        except httpx.HTTPError as e:
            logfire.error("GitHub token exchange HTTP error", error=str(e))
            raise OAuthExchangeFailedError("github", f"HTTP error: {e}")
        except ValueError:
            raise OAuthExchangeFailedError("github", "token response is not JSON")

        if result.get("error"):
            logfire.error(
                "GitHub rejected authorization code",
                error=result.get("error"),
                description=result.get("error_description"),
            )
            raise OAuthExchangeFailedError("github", result["error"])

        access_token = result.get("access_token")
        if not access_token:
            raise OAuthExchangeFailedError("github", "no access_token in response")
        return access_token

    async def fetch_user_info(self, access_token: str) -> OAuthProviderInfo:
        """Fetch the GitHub profile and its primary verified email.

        Raises:
            OAuthExchangeFailedError: If either API call fails
            NoVerifiedEmailError: If no primary verified email exists
        """
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/vnd.github+json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                user_response = await client.get(self.user_url, headers=headers)
                if not user_response.is_success:
                    logfire.error(
                        "GitHub user request failed",
                        status_code=user_response.status_code,
                    )
                    raise OAuthExchangeFailedError(
                        "github", f"user endpoint returned {user_response.status_code}"
                    )
                user = user_response.json()

                emails_response = await client.get(self.emails_url, headers=headers)
                if not emails_response.is_success:
                    logfire.error(
                        "GitHub emails request failed",
                        status_code=emails_response.status_code,
                    )
                    raise OAuthExchangeFailedError(
                        "github",
                        f"emails endpoint returned {emails_response.status_code}",
                    )
                emails = emails_response.json()
        except httpx.HTTPError as e:
            logfire.error("GitHub user info HTTP error", error=str(e))
            raise OAuthExchangeFailedError("github", f"HTTP error: {e}")
        except ValueError:
            raise OAuthExchangeFailedError("github", "profile response is not JSON")

        primary = next(
            (
                entry
                for entry in emails
                if isinstance(entry, dict)
                and entry.get("primary")
                and entry.get("verified")
            ),
            None,
        )
        if primary is None or not primary.get("email"):
            logfire.warn("GitHub account has no verified primary email")
            raise NoVerifiedEmailError("github")

        if "id" not in user:
            raise OAuthExchangeFailedError("github", "profile has no id")

        logfire.info("GitHub profile fetched", provider_user_id=str(user["id"]))

        return OAuthProviderInfo(
            provider=AuthProvider.GITHUB,
            provider_user_id=str(user["id"]),
            email=primary["email"],
            username=display_name(
                user.get("name"), user.get("login"), primary["email"]
            ),
        )


class MockGitHubOAuthClient(GitHubOAuthClient):
    """Mock GitHub OAuth client for testing.

    Returns deterministic test data without making real API calls. Tests can
    replace ``user_info`` or set ``error`` to simulate provider failures.
    """

    def __init__(self) -> None:
        """Initialize mock client without real OAuth configuration."""
        self.user_info = OAuthProviderInfo(
            provider=AuthProvider.GITHUB,
            provider_user_id="123",
            email="alice@example.com",
            username="alice",
        )
        self.error: Exception | None = None
        self.exchanged_codes: list[str] = []

    def is_configured(self) -> bool:
        return True

    def get_auth_url(self, state: str) -> str:
        return f"https://github.com/login/oauth/authorize?state={state}&mock=true"

    async def exchange_code(self, code: str) -> str:
        self.exchanged_codes.append(code)
        if self.error is not None:
            raise self.error
        return f"mock-github-token-{code}"

    async def fetch_user_info(self, access_token: str) -> OAuthProviderInfo:
        if self.error is not None:
            raise self.error
        return self.user_info
