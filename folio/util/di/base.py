"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Swappable infrastructure: each OAuth provider and the database
Component = Literal["github", "google", "persistence"]


class ProviderBase(Provider):
    """Common base so the container builder can treat providers uniformly.

    A provider class with subclasses is a mockable component; its subclasses
    are the production and mock implementations, told apart by
    ``__is_mock__``. A provider without subclasses (config, domain services,
    use cases) is always used as-is.

    Attributes:
        __mock_component__: Name used in ``unmock={...}``; None for concrete providers
        __is_mock__: Whether this is a test double
        __depends_on__: Components that must also be real when this one is
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[frozenset[Component]] = frozenset()
