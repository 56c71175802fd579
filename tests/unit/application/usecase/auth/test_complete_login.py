"""Unit tests for CompleteLoginUseCase."""

import pytest

from folio.adapter.error import NoVerifiedEmailError, OAuthExchangeFailedError
from folio.adapter.github import GitHubOAuthClient
from folio.adapter.google import GoogleOAuthClient
from folio.application.usecase.auth import (
    CompleteLoginRequest,
    CompleteLoginUseCase,
    LoginErrorCode,
    LoginFailure,
    LoginSuccess,
)
from folio.domain.repository import UserRepository
from folio.domain.service import TokenService
from folio.domain.value import AuthProvider, UserRole
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


def callback(
    provider: str = "github",
    code: str | None = "auth-code",
    state: str | None = "nonce-1",
    stored_state: str | None = "nonce-1",
) -> CompleteLoginRequest:
    return CompleteLoginRequest(
        code=code,
        state=state,
        stored_state=stored_state,
        stored_provider=provider,
    )


class TestCompleteLoginSuccess:
    """Tests for successful callbacks."""

    @pytest.mark.asyncio
    async def test_new_user_gets_tokens(self, unit_env):
        """Should create a MEMBER and issue a verifiable token pair."""
        use_case = await unit_env.get(CompleteLoginUseCase)
        token_service = await unit_env.get(TokenService)

        result = await use_case.execute(callback())

        assert isinstance(result, LoginSuccess)
        assert result.provider == AuthProvider.GITHUB
        assert result.role == UserRole.MEMBER
        payload = token_service.verify_access_token(result.tokens.access_token)
        assert payload.user_id == result.user_id
        assert payload.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_exchanges_the_callback_code(self, unit_env):
        use_case = await unit_env.get(CompleteLoginUseCase)
        github = await unit_env.get(GitHubOAuthClient)

        await use_case.execute(callback(code="the-code"))

        assert github.exchanged_codes == ["the-code"]

    @pytest.mark.asyncio
    async def test_second_provider_links_to_same_user(self, unit_env):
        use_case = await unit_env.get(CompleteLoginUseCase)
        user_repo = await unit_env.get(UserRepository)

        via_github = await use_case.execute(callback(provider="github"))
        via_google = await use_case.execute(callback(provider="google"))

        assert isinstance(via_github, LoginSuccess)
        assert isinstance(via_google, LoginSuccess)
        assert via_github.user_id == via_google.user_id
        assert await user_repo.count() == 1


class TestCompleteLoginFailures:
    """Tests for callback failure outcomes."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "code,state",
        [(None, "nonce-1"), ("auth-code", None), ("", "")],
    )
    async def test_missing_parameters(self, unit_env, code, state):
        use_case = await unit_env.get(CompleteLoginUseCase)

        result = await use_case.execute(callback(code=code, state=state))

        assert isinstance(result, LoginFailure)
        assert result.code == LoginErrorCode.INVALID_REQUEST
        assert result.state_consumed is False

    @pytest.mark.asyncio
    async def test_state_mismatch_never_contacts_provider(self, unit_env):
        """A forged callback must fail before the code is exchanged."""
        use_case = await unit_env.get(CompleteLoginUseCase)
        github = await unit_env.get(GitHubOAuthClient)

        result = await use_case.execute(callback(state="attacker-nonce"))

        assert isinstance(result, LoginFailure)
        assert result.code == LoginErrorCode.INVALID_STATE
        assert github.exchanged_codes == []

    @pytest.mark.asyncio
    async def test_missing_state_cookie(self, unit_env):
        use_case = await unit_env.get(CompleteLoginUseCase)

        result = await use_case.execute(callback(stored_state=None))

        assert isinstance(result, LoginFailure)
        assert result.code == LoginErrorCode.INVALID_STATE

    @pytest.mark.asyncio
    async def test_unknown_stored_provider(self, unit_env):
        use_case = await unit_env.get(CompleteLoginUseCase)

        result = await use_case.execute(callback(provider="myspace"))

        assert isinstance(result, LoginFailure)
        assert result.code == LoginErrorCode.INVALID_PROVIDER
        assert result.state_consumed is True

    @pytest.mark.asyncio
    async def test_provider_exchange_failure(self, unit_env):
        use_case = await unit_env.get(CompleteLoginUseCase)
        github = await unit_env.get(GitHubOAuthClient)
        github.error = OAuthExchangeFailedError("github", "bad_verification_code")

        result = await use_case.execute(callback())

        assert isinstance(result, LoginFailure)
        assert result.code == LoginErrorCode.OAUTH_FAILED

    @pytest.mark.asyncio
    async def test_unverified_email(self, unit_env):
        use_case = await unit_env.get(CompleteLoginUseCase)
        google = await unit_env.get(GoogleOAuthClient)
        google.error = NoVerifiedEmailError("google")

        result = await use_case.execute(callback(provider="google"))

        assert isinstance(result, LoginFailure)
        assert result.code == LoginErrorCode.OAUTH_FAILED

    @pytest.mark.asyncio
    async def test_unexpected_provider_error_is_contained(self, unit_env):
        """Even an unexpected exception becomes an outcome, not a crash."""
        use_case = await unit_env.get(CompleteLoginUseCase)
        github = await unit_env.get(GitHubOAuthClient)
        github.error = RuntimeError("boom")

        result = await use_case.execute(callback())

        assert isinstance(result, LoginFailure)
        assert result.code == LoginErrorCode.OAUTH_FAILED

    @pytest.mark.asyncio
    async def test_inactive_account(self, unit_env):
        use_case = await unit_env.get(CompleteLoginUseCase)
        user_repo = await unit_env.get(UserRepository)
        first = await use_case.execute(callback())
        assert isinstance(first, LoginSuccess)
        user = await user_repo.find_by_email("alice@example.com")
        await user_repo.save(user.model_copy(update={"is_active": False}))

        result = await use_case.execute(callback())

        assert isinstance(result, LoginFailure)
        assert result.code == LoginErrorCode.ACCOUNT_INACTIVE
