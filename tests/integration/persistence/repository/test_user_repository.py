"""Integration tests for the PostgreSQL user and identity repositories.

These tests verify database interaction, the uniqueness constraints and
value object handling. They assume postgres is running with migrations
applied (``just local-up``).
"""

from uuid import uuid4

import pytest

from folio.domain.error import ConflictError
from folio.domain.model import User, UserIdentity
from folio.domain.repository import UserIdentityRepository, UserRepository
from folio.domain.value import AuthProvider, UserId, UserIdentityId, UserRole
from folio.domain.value.types import Username
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"persistence"})


def new_user(email: str | None = None) -> User:
    return User(
        id=UserId(uuid4()),
        email=email or f"it-{uuid4().hex[:12]}@example.com",
        username=Username("integration"),
    )


def new_identity(user: User, provider: AuthProvider, provider_user_id=None):
    return UserIdentity(
        id=UserIdentityId(uuid4()),
        user_id=user.id,
        provider=provider,
        provider_user_id=provider_user_id or uuid4().hex,
    )


class TestUserRepositoryIntegration:
    """Integration tests for PostgresUserRepository."""

    @pytest.mark.asyncio
    async def test_create_with_identity_round_trips(self, integration_env):
        users = await integration_env.get(UserRepository)
        identities = await integration_env.get(UserIdentityRepository)
        user = new_user()
        identity = new_identity(user, AuthProvider.GITHUB)

        await users.create_with_identity(user, identity)

        found = await users.find_by_id(user.id)
        assert found is not None
        assert found.email == user.email
        assert found.username == Username("integration")
        assert found.role == UserRole.MEMBER
        linked = await identities.find_by_provider(
            AuthProvider.GITHUB, identity.provider_user_id
        )
        assert linked is not None
        assert linked.user_id == user.id

    @pytest.mark.asyncio
    async def test_duplicate_email_is_a_conflict(self, integration_env):
        """A lost insert race surfaces as ConflictError, and the session survives."""
        users = await integration_env.get(UserRepository)
        first = new_user()
        await users.create_with_identity(
            first, new_identity(first, AuthProvider.GITHUB)
        )
        duplicate = new_user(email=first.email)

        with pytest.raises(ConflictError) as exc_info:
            await users.create_with_identity(
                duplicate, new_identity(duplicate, AuthProvider.GOOGLE)
            )

        assert exc_info.value.field == "email"
        assert await users.find_by_email(first.email) is not None

    @pytest.mark.asyncio
    async def test_duplicate_provider_identity_is_a_conflict(self, integration_env):
        users = await integration_env.get(UserRepository)
        identities = await integration_env.get(UserIdentityRepository)
        user = new_user()
        identity = new_identity(user, AuthProvider.GOOGLE)
        await users.create_with_identity(user, identity)
        other = new_user()
        await users.save(other)

        with pytest.raises(ConflictError):
            await identities.create(
                new_identity(other, AuthProvider.GOOGLE, identity.provider_user_id)
            )

    @pytest.mark.asyncio
    async def test_save_updates_role(self, integration_env):
        users = await integration_env.get(UserRepository)
        user = new_user()
        await users.save(user)

        await users.save(user.model_copy(update={"role": UserRole.OWNER}))

        found = await users.find_by_id(user.id)
        assert found.role == UserRole.OWNER

    @pytest.mark.asyncio
    async def test_find_all_identities_for_user(self, integration_env):
        users = await integration_env.get(UserRepository)
        identities = await integration_env.get(UserIdentityRepository)
        user = new_user()
        await users.create_with_identity(user, new_identity(user, AuthProvider.GITHUB))
        await identities.create(new_identity(user, AuthProvider.GOOGLE))

        linked = await identities.find_all_by_user_id(user.id)

        assert {identity.provider for identity in linked} == {
            AuthProvider.GITHUB,
            AuthProvider.GOOGLE,
        }
