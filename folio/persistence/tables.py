"""SQLAlchemy table definitions for Folio.

These table definitions are used with SQLAlchemy core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE (Provider-agnostic)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("email", String(255), nullable=False),  # Lower-cased, cross-provider key
    Column("username", String(255), nullable=False),
    Column("role", String(20), nullable=False, server_default="MEMBER"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("email", name="uq_users_email"),
)

Index("idx_users_created_at", users_table.c.created_at)

# ============================================================================
# USER IDENTITIES TABLE (Multi-provider authentication)
# ============================================================================
user_identities_table = Table(
    "user_identities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'github', 'google'
    Column("provider_user_id", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("provider", "provider_user_id", name="uq_provider_identity"),
)

Index("idx_user_identities_user_id", user_identities_table.c.user_id)
