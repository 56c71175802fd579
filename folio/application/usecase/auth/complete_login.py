"""Complete login use case (OAuth callback)."""

import secrets
from typing import Literal

import logfire
from pydantic import BaseModel

from folio.adapter.error import AdapterError, NoVerifiedEmailError
from folio.domain.error import InactiveUserError
from folio.domain.service import AuthService, IdentityResolver, TokenService
from folio.domain.value import AuthProvider, UserRole
from folio.util.jwt import TokenPair

from .error import LoginErrorCode


class CompleteLoginRequest(BaseModel):
    """Callback parameters plus what the ``oauth_state`` cookie held.

    Every field is optional: missing values are flow outcomes, not
    validation errors.
    """

    code: str | None = None
    state: str | None = None
    stored_state: str | None = None
    stored_provider: str | None = None


class LoginSuccess(BaseModel):
    """User authenticated; the route sets cookies from ``tokens``."""

    outcome: Literal["success"] = "success"
    user_id: str
    role: UserRole
    provider: AuthProvider
    tokens: TokenPair


class LoginFailure(BaseModel):
    """Callback failed; the route redirects to the frontend error page."""

    outcome: Literal["failure"] = "failure"
    code: LoginErrorCode

    @property
    def state_consumed(self) -> bool:
        """Whether the nonce matched, so the state cookie must be cleared."""
        return self.code not in (
            LoginErrorCode.INVALID_REQUEST,
            LoginErrorCode.INVALID_STATE,
        )


LoginResult = LoginSuccess | LoginFailure


def states_match(received: str, stored: str) -> bool:
    """Constant-time comparison of the callback nonce with the stored nonce."""
    return secrets.compare_digest(received.encode(), stored.encode())


class CompleteLoginUseCase:
    """Use case for the OAuth callback.

    Walks ``CALLBACK_PENDING -> AUTHENTICATED | FAILED`` and returns the
    outcome as a value; provider, network and persistence failures never
    escape as exceptions. Nothing is retried.
    """

    def __init__(
        self,
        auth_service: AuthService,
        identity_resolver: IdentityResolver,
        token_service: TokenService,
    ) -> None:
        """Initialize complete login use case.

        Args:
            auth_service: Authentication domain service (provider lookup)
            identity_resolver: Maps provider profiles to local users
            token_service: JWT token domain service
        """
        self.auth_service = auth_service
        self.identity_resolver = identity_resolver
        self.token_service = token_service

    async def execute(self, request: CompleteLoginRequest) -> LoginResult:
        """Execute the callback flow.

        Steps:
        1. Require ``code`` and ``state``
        2. Match ``state`` against the stored nonce (CSRF check)
        3. Look up the provider recorded at login start
        4. Exchange the code and fetch the verified profile
        5. Resolve the local user
        6. Issue a token pair

        Args:
            request: Callback parameters and stored state

        Returns:
            ``LoginSuccess`` or ``LoginFailure`` with the reason code
        """
        with logfire.span("complete_login", provider=request.stored_provider):
            if not request.code or not request.state:
                logfire.warn("OAuth callback missing code or state")
                return LoginFailure(code=LoginErrorCode.INVALID_REQUEST)

            if not request.stored_state or not states_match(
                request.state, request.stored_state
            ):
                logfire.warn(
                    "OAuth state mismatch",
                    has_stored_state=bool(request.stored_state),
                )
                return LoginFailure(code=LoginErrorCode.INVALID_STATE)

            client = self.auth_service.get_client(request.stored_provider)
            if client is None:
                return LoginFailure(code=LoginErrorCode.INVALID_PROVIDER)

            try:
                provider_token = await client.exchange_code(request.code)
                profile = await client.fetch_user_info(provider_token)
            except NoVerifiedEmailError as e:
                logfire.warn("OAuth login without verified email", error=str(e))
                return LoginFailure(code=LoginErrorCode.OAUTH_FAILED)
            except AdapterError as e:
                logfire.error("OAuth exchange failed", error=str(e))
                return LoginFailure(code=LoginErrorCode.OAUTH_FAILED)
            except Exception:
                logfire.exception(
                    "Unexpected OAuth provider failure", provider=client.provider.value
                )
                return LoginFailure(code=LoginErrorCode.OAUTH_FAILED)

            try:
                user = await self.identity_resolver.resolve(profile)
            except InactiveUserError:
                return LoginFailure(code=LoginErrorCode.ACCOUNT_INACTIVE)
            except Exception:
                logfire.exception(
                    "Identity resolution failed", provider=client.provider.value
                )
                return LoginFailure(code=LoginErrorCode.OAUTH_FAILED)

            tokens = self.token_service.generate_tokens(str(user.id), user.email)

            logfire.info(
                "User logged in",
                user_id=str(user.id),
                provider=client.provider.value,
            )

            return LoginSuccess(
                user_id=str(user.id),
                role=user.role,
                provider=client.provider,
                tokens=tokens,
            )
