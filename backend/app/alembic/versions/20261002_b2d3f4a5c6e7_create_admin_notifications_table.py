"""Create admin_notifications table.

Revision ID: b2d3f4a5c6e7
Revises: a1c2e3f4b5d6
Create Date: 2026-10-02
"""

import sqlalchemy as sa
from alembic import op

revision = "b2d3f4a5c6e7"
down_revision = "a1c2e3f4b5d6"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "admin_notifications",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("type", sa.String(length=40), nullable=False),
        sa.Column("priority", sa.String(length=20), nullable=False, server_default="medium"),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("message", sa.String(length=1000), nullable=False),
        sa.Column("link", sa.String(length=2048), nullable=True),
        sa.Column("actor_id", sa.String(length=36), nullable=True),
        sa.Column("target_type", sa.String(length=30), nullable=True),
        sa.Column("target_id", sa.String(length=36), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("is_dismissed", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admin_notifications_type", "admin_notifications", ["type"])
    op.create_index("ix_admin_notifications_priority", "admin_notifications", ["priority"])
    op.create_index("ix_admin_notifications_is_read", "admin_notifications", ["is_read"])
    op.create_index(
        "ix_admin_notifications_is_dismissed", "admin_notifications", ["is_dismissed"]
    )
    op.create_index("ix_admin_notifications_created_at", "admin_notifications", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_admin_notifications_created_at", table_name="admin_notifications")
    op.drop_index("ix_admin_notifications_is_dismissed", table_name="admin_notifications")
    op.drop_index("ix_admin_notifications_is_read", table_name="admin_notifications")
    op.drop_index("ix_admin_notifications_priority", table_name="admin_notifications")
    op.drop_index("ix_admin_notifications_type", table_name="admin_notifications")
    op.drop_table("admin_notifications")
