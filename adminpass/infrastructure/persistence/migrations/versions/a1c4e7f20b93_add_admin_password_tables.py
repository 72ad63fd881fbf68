"""add_admin_password_tables

Revision ID: a1c4e7f20b93
Revises:
Create Date: 2026-10-19

Weekly admin PIN records, usage log, generation events and user roles.
At most one admin_password row may be active (partial unique index).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1c4e7f20b93"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create admin password tables and indexes."""
    op.create_table(
        "admin_password",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("period", sa.String(length=8), nullable=False),
        sa.Column("password", sa.String(length=16), nullable=False),
        sa.Column("hashed_password", sa.String(length=64), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("usage_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deactivated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admin_password_hashed_password", "admin_password", ["hashed_password"])
    op.create_index("ix_admin_password_expires_at", "admin_password", ["expires_at"])
    op.create_index("ix_admin_password_period_active", "admin_password", ["period", "is_active"])
    op.create_index(
        "uq_admin_password_single_active",
        "admin_password",
        ["is_active"],
        unique=True,
        postgresql_where=sa.text("is_active"),
        sqlite_where=sa.text("is_active = 1"),
    )

    op.create_table(
        "admin_password_usage",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("password_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("action", sa.String(length=100), nullable=False),
        sa.Column("target_id", sa.String(), nullable=True),
        sa.Column("target_type", sa.String(length=100), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("ip_address", sa.String(), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["password_id"], ["admin_password.id"], ondelete="RESTRICT"),
    )
    op.create_index("ix_admin_password_usage_password_id", "admin_password_usage", ["password_id"])
    op.create_index("ix_admin_password_usage_user_id", "admin_password_usage", ["user_id"])
    op.create_index("ix_admin_password_usage_action", "admin_password_usage", ["action"])
    op.create_index("ix_admin_password_usage_timestamp", "admin_password_usage", ["timestamp"])

    op.create_table(
        "admin_password_event",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("password_id", sa.String(), nullable=False),
        sa.Column("event_type", sa.String(length=32), nullable=False),
        sa.Column("period", sa.String(length=8), nullable=False),
        sa.Column("method", sa.String(length=16), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=True),
        sa.Column("timestamp", sa.DateTime(timezone=True), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["password_id"], ["admin_password.id"], ondelete="RESTRICT"),
    )
    op.create_index("ix_admin_password_event_password_id", "admin_password_event", ["password_id"])

    op.create_table(
        "user_role",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_role_user_id", "user_role", ["user_id"], unique=True)


def downgrade() -> None:
    """Drop admin password tables and indexes."""
    op.drop_index("ix_user_role_user_id", table_name="user_role")
    op.drop_table("user_role")
    op.drop_index("ix_admin_password_event_password_id", table_name="admin_password_event")
    op.drop_table("admin_password_event")
    op.drop_index("ix_admin_password_usage_timestamp", table_name="admin_password_usage")
    op.drop_index("ix_admin_password_usage_action", table_name="admin_password_usage")
    op.drop_index("ix_admin_password_usage_user_id", table_name="admin_password_usage")
    op.drop_index("ix_admin_password_usage_password_id", table_name="admin_password_usage")
    op.drop_table("admin_password_usage")
    op.drop_index("uq_admin_password_single_active", table_name="admin_password")
    op.drop_index("ix_admin_password_period_active", table_name="admin_password")
    op.drop_index("ix_admin_password_expires_at", table_name="admin_password")
    op.drop_index("ix_admin_password_hashed_password", table_name="admin_password")
    op.drop_table("admin_password")
