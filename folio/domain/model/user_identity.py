"""User identity entity.

Links an external OAuth account to a local user.
"""

from datetime import datetime, timezone

from pydantic import Field

from folio.domain.model.common import DomainModel
from folio.domain.value import AuthProvider, UserId, UserIdentityId


class UserIdentity(DomainModel):
    """Identity link: ``(provider, provider_user_id)`` -> user.

    A user may own one link per provider. A given provider account maps to
    exactly one user. Links are created on the first successful callback for
    that provider and never mutated afterwards.
    """

    id: UserIdentityId
    user_id: UserId
    provider: AuthProvider
    provider_user_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
