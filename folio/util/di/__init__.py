"""Dependency injection module.

``PROVIDERS`` is the single registry. The production container takes the
real subclass of every mockable component; tests choose per component
(see ``tests/di/container.py``).
"""

from typing import Type

from folio.util.di.application import ProdApplicationProvider
from folio.util.di.base import Component, ProviderBase
from folio.util.di.core import ProdConfigProvider
from folio.util.di.domain import ProdDomainProvider
from folio.util.di.infrastructure import (
    GitHubProvider,
    GoogleProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
    ProdGitHubProvider,
    ProdGoogleProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    # Always real
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable: one OAuth client per provider, plus the database
    GitHubProvider,
    GoogleProvider,
    PersistenceProvider,
    # Builds the provider -> client lookup table from whichever clients were chosen
    OAuthAggregatorProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for a registry entry.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Whether a mockable component should use its test double

    Returns:
        ``base`` itself for concrete providers, otherwise the subclass whose
        ``__is_mock__`` matches ``use_mock``

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if getattr(implementation, "__is_mock__", False) == use_mock:
            return implementation

    kind = "mock" if use_mock else "production"
    component_name = base.__mock_component__ or base.__name__
    raise ValueError(f"No {kind} implementation for {component_name}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "GitHubProvider",
    "GoogleProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdGitHubProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
]
