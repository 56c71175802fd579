"""Unit tests for RefreshSessionUseCase."""

from datetime import timedelta
from uuid import uuid4

import pytest

from folio.application.usecase.auth import (
    RefreshFailure,
    RefreshSessionRequest,
    RefreshSessionUseCase,
    RefreshSuccess,
)
from folio.config import AuthSettings
from folio.domain.model import User
from folio.domain.repository import UserRepository
from folio.domain.service import TokenService
from folio.domain.value import UserId
from folio.domain.value.types import Username
from folio.util.jwt import create_token
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def save_user(env, is_active: bool = True) -> User:
    repo = await env.get(UserRepository)
    user = User(
        id=UserId(uuid4()),
        email="bob@example.com",
        username=Username("bob"),
        is_active=is_active,
    )
    return await repo.save(user)


class TestRefreshSession:
    """Tests for RefreshSessionUseCase."""

    @pytest.mark.asyncio
    async def test_issues_new_pair_for_active_user(self, unit_env):
        use_case = await unit_env.get(RefreshSessionUseCase)
        token_service = await unit_env.get(TokenService)
        user = await save_user(unit_env)
        tokens = token_service.generate_tokens(str(user.id), user.email)

        result = await use_case.execute(
            RefreshSessionRequest(refresh_token=tokens.refresh_token)
        )

        assert isinstance(result, RefreshSuccess)
        assert result.user.id == user.id
        payload = token_service.verify_access_token(result.tokens.access_token)
        assert payload.user_id == str(user.id)

    @pytest.mark.asyncio
    async def test_missing_token(self, unit_env):
        use_case = await unit_env.get(RefreshSessionUseCase)

        result = await use_case.execute(RefreshSessionRequest())

        assert isinstance(result, RefreshFailure)
        assert result.reason == "missing"

    @pytest.mark.asyncio
    async def test_expired_token(self, unit_env):
        use_case = await unit_env.get(RefreshSessionUseCase)
        settings = await unit_env.get(AuthSettings)
        user = await save_user(unit_env)
        expired = create_token(
            str(user.id),
            user.email,
            settings.jwt_refresh_secret,
            timedelta(seconds=-5),
        )

        result = await use_case.execute(RefreshSessionRequest(refresh_token=expired))

        assert isinstance(result, RefreshFailure)
        assert result.reason == "expired"

    @pytest.mark.asyncio
    async def test_access_token_is_not_accepted(self, unit_env):
        """An access token must not be usable as a refresh token."""
        use_case = await unit_env.get(RefreshSessionUseCase)
        token_service = await unit_env.get(TokenService)
        user = await save_user(unit_env)
        tokens = token_service.generate_tokens(str(user.id), user.email)

        result = await use_case.execute(
            RefreshSessionRequest(refresh_token=tokens.access_token)
        )

        assert isinstance(result, RefreshFailure)
        assert result.reason == "invalid"

    @pytest.mark.asyncio
    async def test_inactive_user(self, unit_env):
        use_case = await unit_env.get(RefreshSessionUseCase)
        token_service = await unit_env.get(TokenService)
        user = await save_user(unit_env, is_active=False)
        tokens = token_service.generate_tokens(str(user.id), user.email)

        result = await use_case.execute(
            RefreshSessionRequest(refresh_token=tokens.refresh_token)
        )

        assert isinstance(result, RefreshFailure)
        assert result.reason == "inactive"

    @pytest.mark.asyncio
    async def test_deleted_user(self, unit_env):
        use_case = await unit_env.get(RefreshSessionUseCase)
        token_service = await unit_env.get(TokenService)
        tokens = token_service.generate_tokens(str(uuid4()), "ghost@example.com")

        result = await use_case.execute(
            RefreshSessionRequest(refresh_token=tokens.refresh_token)
        )

        assert isinstance(result, RefreshFailure)
        assert result.reason == "inactive"
