"""In-memory repository implementations for testing."""

from .user import InMemoryUserRepository
from .user_identity import InMemoryUserIdentityRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryUserIdentityRepository",
]
