"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from folio.domain.model import User, UserIdentity
from folio.domain.value import AuthProvider, UserId, UserIdentityId, UserRole
from folio.domain.value.types import Username


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        username=Username(row["username"]),
        role=UserRole(row["role"]),
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "email": user.email,
        "username": user.username.root,
        "role": user.role.value,
        "is_active": user.is_active,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_user_identity(row: Dict[str, Any]) -> UserIdentity:
    """Convert database row to UserIdentity domain model.

    Args:
        row: Database row as dict

    Returns:
        UserIdentity domain model
    """
    return UserIdentity(
        id=UserIdentityId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        provider=AuthProvider(row["provider"]),
        provider_user_id=row["provider_user_id"],
        created_at=row["created_at"],
    )


def user_identity_to_dict(identity: UserIdentity) -> Dict[str, Any]:
    """Convert UserIdentity domain model to database dict.

    Args:
        identity: UserIdentity domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": identity.id,
        "user_id": identity.user_id,
        "provider": identity.provider.value,
        "provider_user_id": identity.provider_user_id,
        "created_at": identity.created_at,
    }
