"""Unit tests for IdentityResolver."""

from uuid import uuid4

import pytest

from folio.domain.error import ConflictError, InactiveUserError, NotFoundError
from folio.domain.model import User, UserIdentity
from folio.domain.service import IdentityResolver
from folio.domain.value import (
    AuthProvider,
    OAuthProviderInfo,
    UserId,
    UserIdentityId,
    UserRole,
)
from folio.domain.value.types import Username
from folio.persistence.repository.inmemory import (
    InMemoryUserIdentityRepository,
    InMemoryUserRepository,
)


def github_profile(email: str = "alice@example.com") -> OAuthProviderInfo:
    return OAuthProviderInfo(
        provider=AuthProvider.GITHUB,
        provider_user_id="123",
        email=email,
        username="alice",
    )


def google_profile(email: str = "alice@example.com") -> OAuthProviderInfo:
    return OAuthProviderInfo(
        provider=AuthProvider.GOOGLE,
        provider_user_id="google-456",
        email=email,
        username="Alice G",
    )


@pytest.fixture
def repos():
    identities = InMemoryUserIdentityRepository()
    users = InMemoryUserRepository(identity_repository=identities)
    return users, identities


class TestResolve:
    """Tests for IdentityResolver.resolve()."""

    @pytest.mark.asyncio
    async def test_creates_member_on_first_login(self, repos):
        """Should create a MEMBER user with one identity link."""
        users, identities = repos
        resolver = IdentityResolver(users, identities)

        user = await resolver.resolve(github_profile())

        assert user.email == "alice@example.com"
        assert str(user.username) == "alice"
        assert user.role == UserRole.MEMBER
        assert user.is_active is True
        links = await identities.find_all_by_user_id(user.id)
        assert [link.provider for link in links] == [AuthProvider.GITHUB]

    @pytest.mark.asyncio
    async def test_repeat_login_returns_same_user(self, repos):
        """Logging in twice with the same account must not duplicate anything."""
        users, identities = repos
        resolver = IdentityResolver(users, identities)

        first = await resolver.resolve(github_profile())
        second = await resolver.resolve(github_profile())

        assert first.id == second.id
        assert await users.count() == 1
        assert len(await identities.find_all_by_user_id(first.id)) == 1

    @pytest.mark.asyncio
    async def test_links_second_provider_by_email(self, repos):
        """Should attach a Google identity to the GitHub user with the same email."""
        users, identities = repos
        resolver = IdentityResolver(users, identities)

        github_user = await resolver.resolve(github_profile())
        google_user = await resolver.resolve(google_profile())

        assert google_user.id == github_user.id
        assert await users.count() == 1
        links = await identities.find_all_by_user_id(github_user.id)
        assert {link.provider for link in links} == {
            AuthProvider.GITHUB,
            AuthProvider.GOOGLE,
        }

    @pytest.mark.asyncio
    async def test_email_match_is_case_insensitive(self, repos):
        users, identities = repos
        resolver = IdentityResolver(users, identities)

        github_user = await resolver.resolve(github_profile("Alice@Example.com"))
        google_user = await resolver.resolve(google_profile("alice@example.COM"))

        assert google_user.id == github_user.id

    @pytest.mark.asyncio
    async def test_provider_id_wins_over_changed_email(self, repos):
        """An existing link is used even if the provider email changed."""
        users, identities = repos
        resolver = IdentityResolver(users, identities)

        first = await resolver.resolve(github_profile())
        again = await resolver.resolve(github_profile("new-address@example.com"))

        assert again.id == first.id
        assert again.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_inactive_linked_user_is_rejected(self, repos):
        users, identities = repos
        resolver = IdentityResolver(users, identities)
        user = await resolver.resolve(github_profile())
        await users.save(user.model_copy(update={"is_active": False}))

        with pytest.raises(InactiveUserError):
            await resolver.resolve(github_profile())

    @pytest.mark.asyncio
    async def test_inactive_email_match_gets_no_new_link(self, repos):
        """Should refuse before writing a link for a deactivated account."""
        users, identities = repos
        resolver = IdentityResolver(users, identities)
        user = await resolver.resolve(github_profile())
        await users.save(user.model_copy(update={"is_active": False}))

        with pytest.raises(InactiveUserError):
            await resolver.resolve(google_profile())

        links = await identities.find_all_by_user_id(user.id)
        assert [link.provider for link in links] == [AuthProvider.GITHUB]

    @pytest.mark.asyncio
    async def test_dangling_link_raises_not_found(self, repos):
        users, identities = repos
        resolver = IdentityResolver(users, identities)
        await identities.create(
            UserIdentity(
                id=UserIdentityId(uuid4()),
                user_id=UserId(uuid4()),
                provider=AuthProvider.GITHUB,
                provider_user_id="123",
            )
        )

        with pytest.raises(NotFoundError):
            await resolver.resolve(github_profile())


class RacingUserRepository(InMemoryUserRepository):
    """Simulates another callback creating the same user first.

    The first ``create_with_identity`` commits the competing row and then
    reports the uniqueness violation, like a lost insert race would.
    """

    def __init__(self, identity_repository, competitor: User, link: UserIdentity):
        super().__init__(identity_repository=identity_repository)
        self.competitor = competitor
        self.link = link
        self.raced = False

    async def create_with_identity(self, user, identity):
        if not self.raced:
            self.raced = True
            await super().create_with_identity(self.competitor, self.link)
            raise ConflictError("User", "email")
        return await super().create_with_identity(user, identity)


class TestConcurrentFirstLogin:
    """Tests for the uniqueness conflict retry."""

    @pytest.mark.asyncio
    async def test_conflict_joins_the_winning_account(self):
        """A lost insert race re-reads and returns the winner's user."""
        identities = InMemoryUserIdentityRepository()
        winner = User(
            id=UserId(uuid4()),
            email="alice@example.com",
            username=Username("alice"),
        )
        link = UserIdentity(
            id=UserIdentityId(uuid4()),
            user_id=winner.id,
            provider=AuthProvider.GITHUB,
            provider_user_id="123",
        )
        users = RacingUserRepository(identities, winner, link)
        resolver = IdentityResolver(users, identities)

        user = await resolver.resolve(github_profile())

        assert user.id == winner.id
        assert await users.count() == 1
