"""initial swipe schema

Revision ID: 5c1e2a7d9b40
Revises:
Create Date: 2026-10-19 09:12:41.518204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a7d9b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create decision, connection, moderation and catalog tables."""
    op.create_table(
        "swipe_decision",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("target_id", sa.String(length=64), nullable=False),
        sa.Column("target_type", sa.String(length=16), nullable=False),
        sa.Column("direction", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "target_type IN ('event', 'attendee')", name="ck_swipe_decision_target_type"
        ),
        sa.CheckConstraint("direction IN ('left', 'right')", name="ck_swipe_decision_direction"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "target_id", "target_type", name="uq_swipe_decision_user_target"
        ),
    )
    op.create_index("ix_swipe_decision_user_id", "swipe_decision", ["user_id"])

    op.create_table(
        "connection",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("connected_user_id", sa.String(length=64), nullable=False),
        sa.Column("pair_key", sa.String(length=129), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pair_key"),
    )
    op.create_index("ix_connection_user_id", "connection", ["user_id"])
    op.create_index("ix_connection_connected_user_id", "connection", ["connected_user_id"])

    op.create_table(
        "user_block",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("blocker_id", sa.String(length=64), nullable=False),
        sa.Column("blocked_user_id", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("blocker_id", "blocked_user_id", name="uq_user_block_pair"),
    )
    op.create_index("ix_user_block_blocked_user_id", "user_block", ["blocked_user_id"])

    op.create_table(
        "user_report",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("reporter_id", sa.String(length=64), nullable=False),
        sa.Column("reported_user_id", sa.String(length=64), nullable=False),
        sa.Column("reason", sa.String(length=64), nullable=False),
        sa.Column("additional_details", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_report_reporter_id", "user_report", ["reporter_id"])

    op.create_table(
        "catalog_event",
        sa.Column("seq", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("time_label", sa.String(length=64), nullable=False),
        sa.Column("day", sa.Integer(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("recommended", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("seq"),
        sa.UniqueConstraint("id"),
    )

    op.create_table(
        "catalog_attendee",
        sa.Column("seq", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=255), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("recommended", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("seq"),
        sa.UniqueConstraint("id"),
    )


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_table("catalog_attendee")
    op.drop_table("catalog_event")
    op.drop_index("ix_user_report_reporter_id", table_name="user_report")
    op.drop_table("user_report")
    op.drop_index("ix_user_block_blocked_user_id", table_name="user_block")
    op.drop_table("user_block")
    op.drop_index("ix_connection_connected_user_id", table_name="connection")
    op.drop_index("ix_connection_user_id", table_name="connection")
    op.drop_table("connection")
    op.drop_index("ix_swipe_decision_user_id", table_name="swipe_decision")
    op.drop_table("swipe_decision")
