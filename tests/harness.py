"""Test harness for unit, integration and E2E tests.

Settings are loaded from environment variables (see conftest.py).
"""

import pytest_asyncio

from folio.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Settings loaded from environment automatically

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_resolve(unit_env):
            resolver = await unit_env.get(IdentityResolver)
            user = await resolver.resolve(profile)
            assert user.id is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        # Build container with specified unmocking
        container = build_test_container(unmock=unmock or set())

        # Open request-scoped context
        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
