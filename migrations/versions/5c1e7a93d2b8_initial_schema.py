"""initial_schema

Create the schema for SSO account reconciliation:
- Roles (unique names, integer ids)
- Users (basic and extended accounts in one table)
- Identity links (one row per provider identity)

Revision ID: 5c1e7a93d2b8
Revises:
Create Date: 2026-10-18 10:12:44.318020

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "5c1e7a93d2b8"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # ROLES table
    # ========================================================================
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_roles_name"),
    )

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column(
            "kind", sa.String(20), nullable=False, server_default="extended"
        ),  # 'basic' or 'extended'
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("enable", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("mail", sa.String(255), nullable=True),
        sa.Column("mobile", sa.String(50), nullable=True),
        sa.Column("code", sa.String(100), nullable=True),
        sa.Column("sex", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("role_id", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("logins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_login", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("last_login_ip", sa.String(64), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_users_name"),
    )

    # ========================================================================
    # IDENTITY_LINKS table
    # ========================================================================
    op.create_table(
        "identity_links",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("open_id", sa.String(255), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("enable", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("nickname", sa.String(255), nullable=True),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column("access_token", sa.Text(), nullable=True),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "claims",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "provider", "open_id", name="uq_identity_links_provider_open_id"
        ),
    )
    op.create_index("idx_identity_links_user_id", "identity_links", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_identity_links_user_id", table_name="identity_links")
    op.drop_table("identity_links")
    op.drop_table("users")
    op.drop_table("roles")
