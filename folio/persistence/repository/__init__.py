"""PostgreSQL repository implementations."""

from folio.persistence.repository.user import PostgresUserRepository
from folio.persistence.repository.user_identity_repository import (
    PostgresUserIdentityRepository,
)

__all__ = [
    "PostgresUserRepository",
    "PostgresUserIdentityRepository",
]
