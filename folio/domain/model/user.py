"""User aggregate root.

Users sign in through GitHub or Google; email is the key that ties
several provider identities to one account.
"""

from datetime import datetime, timezone

from pydantic import Field

from folio.domain.model.common import DomainModel
from folio.domain.value import UserId, UserRole
from folio.domain.value.types import Username


def _now() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """User aggregate root - provider-agnostic.

    ``is_active=False`` blocks every form of authentication until the flag
    is reset by account management.
    """

    id: UserId
    email: str  # Unique, lower-cased
    username: Username
    role: UserRole = UserRole.MEMBER
    is_active: bool = True
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @property
    def is_owner(self) -> bool:
        """Whether the user owns the blog."""
        return self.role == UserRole.OWNER
