"""Domain model entities for Folio."""

from folio.domain.model.user import User
from folio.domain.model.user_identity import UserIdentity

__all__ = [
    "User",
    "UserIdentity",
]
