"""PostgreSQL implementation of User repository."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from folio.domain.error import ConflictError
from folio.domain.model import User, UserIdentity
from folio.domain.repository import UserRepository
from folio.domain.value import UserId
from folio.persistence.mappers import row_to_user, user_identity_to_dict, user_to_dict
from folio.persistence.tables import user_identities_table, users_table


def _conflicting_field(error: IntegrityError) -> str:
    # asyncpg exposes the violated constraint on the wrapped driver error
    driver_error = getattr(error.orig, "__cause__", None)
    constraint = getattr(driver_error, "constraint_name", None)
    if constraint == "uq_provider_identity":
        return "provider_identity"
    return "email"


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: Email to search for (stored lower-cased)

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email.lower())
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def create_with_identity(self, user: User, identity: UserIdentity) -> User:
        """Insert the user and its first identity inside a SAVEPOINT.

        A unique violation rolls back to the savepoint only, so the request
        session stays usable for the re-read that follows.

        Raises:
            ConflictError: If the email or provider identity already exists
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    users_table.insert().values(**user_to_dict(user))
                )
                await self.session.execute(
                    user_identities_table.insert().values(
                        **user_identity_to_dict(identity)
                    )
                )
        except IntegrityError as e:
            raise ConflictError("User", _conflicting_field(e)) from e
        return user

    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: User to save

        Returns:
            Saved user
        """
        existing = await self.find_by_id(user.id)

        user_dict = user_to_dict(user)

        if existing:
            user_dict["updated_at"] = datetime.now(timezone.utc)
            stmt = (
                users_table.update()
                .where(users_table.c.id == user.id)
                .values(**user_dict)
            )
        else:
            stmt = users_table.insert().values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return user.model_copy(update={"updated_at": user_dict["updated_at"]})

    async def list(self, offset: int = 0, limit: int = 20) -> list[User]:
        """List users in creation order.

        Args:
            offset: Number of users to skip
            limit: Maximum number of users to return

        Returns:
            Users on the requested page
        """
        stmt = (
            select(users_table)
            .order_by(users_table.c.created_at, users_table.c.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def count(self) -> int:
        """Count all users."""
        stmt = select(func.count()).select_from(users_table)
        result = await self.session.execute(stmt)
        return result.scalar_one()
