"""SQLAlchemy table definitions for the SSO service.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ROLES TABLE
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("name", name="uq_roles_name"),
)

# ============================================================================
# USERS TABLE (basic and extended accounts share one table)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("kind", String(20), nullable=False, server_default="extended"),
    Column("name", String(255), nullable=False),
    Column("display_name", String(255), nullable=True),
    Column("enable", Boolean, nullable=False, server_default="true"),
    Column("password_hash", String(255), nullable=True),
    # Extended profile
    Column("mail", String(255), nullable=True),
    Column("mobile", String(50), nullable=True),
    Column("code", String(100), nullable=True),
    Column("sex", SmallInteger, nullable=False, server_default="0"),
    Column("role_id", Integer, nullable=False, server_default="0"),  # 0 = none
    Column("avatar", Text, nullable=True),
    # Login audit
    Column("logins", Integer, nullable=False, server_default="0"),
    Column("last_login", TIMESTAMP(timezone=True), nullable=True),
    Column("last_login_ip", String(64), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("name", name="uq_users_name"),
)

# ============================================================================
# IDENTITY LINKS TABLE
# ============================================================================
identity_links_table = Table(
    "identity_links",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("provider", String(50), nullable=False),
    Column("open_id", String(255), nullable=False),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("enable", Boolean, nullable=False, server_default="false"),
    # Snapshot of the last identity seen
    Column("username", String(255), nullable=True),
    Column("nickname", String(255), nullable=True),
    Column("avatar", Text, nullable=True),
    Column("access_token", Text, nullable=True),
    Column("refresh_token", Text, nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("claims", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("provider", "open_id", name="uq_identity_links_provider_open_id"),
)

Index("idx_identity_links_user_id", identity_links_table.c.user_id)
