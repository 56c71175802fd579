"""Repository interfaces for the Folio domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from folio.domain.repository.user import UserRepository
from folio.domain.repository.user_identity import UserIdentityRepository

__all__ = [
    "UserRepository",
    "UserIdentityRepository",
]
