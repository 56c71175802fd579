"""Strongly typed identifiers for Folio domain entities.

NewType keeps user IDs and identity-link IDs from being mixed up.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
UserIdentityId = NewType("UserIdentityId", UUID)
