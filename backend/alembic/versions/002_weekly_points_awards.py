"""Weekly points award marker: points already granted per (user, week).

Revision ID: 002
Revises: 001
Create Date: 2026-10-05

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "weekly_points_awards",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("week_start", sa.Date(), nullable=False),
        sa.Column("points_awarded", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "week_start", name="uq_weekly_points_awards_user_week"),
    )
    op.create_index("ix_weekly_points_awards_user_id", "weekly_points_awards", ["user_id"], unique=False)
    op.create_index("ix_weekly_points_awards_week_start", "weekly_points_awards", ["week_start"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_weekly_points_awards_week_start", table_name="weekly_points_awards")
    op.drop_index("ix_weekly_points_awards_user_id", table_name="weekly_points_awards")
    op.drop_table("weekly_points_awards")
