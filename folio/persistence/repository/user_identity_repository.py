"""UserIdentity repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from folio.domain.error import ConflictError
from folio.domain.model.user_identity import UserIdentity
from folio.domain.repository.user_identity import UserIdentityRepository
from folio.domain.value import AuthProvider, UserId
from folio.persistence.mappers import row_to_user_identity, user_identity_to_dict
from folio.persistence.tables import user_identities_table


class PostgresUserIdentityRepository(UserIdentityRepository):
    """PostgreSQL implementation of UserIdentityRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, identity: UserIdentity) -> UserIdentity:
        """Insert a new identity link.

        Args:
            identity: UserIdentity to create

        Returns:
            Created UserIdentity

        Raises:
            ConflictError: If the provider identity is already linked
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    user_identities_table.insert().values(
                        **user_identity_to_dict(identity)
                    )
                )
        except IntegrityError as e:
            raise ConflictError("UserIdentity", "provider_identity") from e
        return identity

    async def find_by_provider(
        self, provider: AuthProvider, provider_user_id: str
    ) -> Optional[UserIdentity]:
        """Get user identity by provider and provider user ID.

        Args:
            provider: Authentication provider
            provider_user_id: Provider-specific user ID

        Returns:
            UserIdentity if found, None otherwise
        """
        stmt = select(user_identities_table).where(
            user_identities_table.c.provider == provider.value,
            user_identities_table.c.provider_user_id == provider_user_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return row_to_user_identity(dict(row))

    async def find_all_by_user_id(self, user_id: UserId) -> list[UserIdentity]:
        """Find all identities for a user.

        Args:
            user_id: User ID to find identities for

        Returns:
            List of UserIdentity objects (may be empty)
        """
        stmt = (
            select(user_identities_table)
            .where(user_identities_table.c.user_id == user_id)
            .order_by(user_identities_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()

        return [row_to_user_identity(dict(row)) for row in rows]
