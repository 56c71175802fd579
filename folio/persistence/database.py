"""Async PostgreSQL engine and sessions for the user store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from folio.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine.

    Every login and every authenticated request reads the users table, so
    the pool is sized from settings and stale connections are recycled
    rather than surfacing as lookup failures.

    Args:
        settings: Application settings

    Returns:
        Configured async engine
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_recycle=database.pool_recycle_seconds,
        connect_args={"server_settings": {"application_name": "folio-api"}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the request session factory.

    Sessions never autocommit; the DI provider commits once per request.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
