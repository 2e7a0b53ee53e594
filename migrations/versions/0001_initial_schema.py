"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17 00:00:00.000000

users (with streak state), log_entries, weekly_summaries.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_CATEGORIES = (
    "health", "work", "personal", "family", "social",
    "finance", "learning", "other", "uncategorized",
)
_SENTIMENTS = ("positive", "negative", "neutral", "mixed")


def upgrade() -> None:
    # --- ENUM types ---
    category_enum = sa.Enum(*_CATEGORIES, name="log_category_enum")
    category_enum.create(op.get_bind(), checkfirst=True)

    sentiment_enum = sa.Enum(*_SENTIMENTS, name="log_sentiment_enum")
    sentiment_enum.create(op.get_bind(), checkfirst=True)

    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("external_id", sa.String(128), nullable=False),
        sa.Column("streak_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("longest_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_log_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_external_id", "users", ["external_id"], unique=True)

    # --- log_entries ---
    op.create_table(
        "log_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_seconds", sa.Float(), nullable=True),
        sa.Column("category", sa.Enum(*_CATEGORIES, name="log_category_enum", create_type=False), nullable=True),
        sa.Column("sentiment", sa.Enum(*_SENTIMENTS, name="log_sentiment_enum", create_type=False), nullable=True),
        sa.Column("keywords", sa.Text(), nullable=True),
        sa.Column("title", sa.String(100), nullable=True),
        sa.Column("transcript", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_log_entries_id", "log_entries", ["id"])
    op.create_index("ix_log_entries_user_timestamp", "log_entries", ["user_id", "timestamp"])

    # --- weekly_summaries ---
    op.create_table(
        "weekly_summaries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("week_start", sa.DateTime(timezone=True), nullable=False, comment="Monday 00:00 UTC"),
        sa.Column("week_end", sa.DateTime(timezone=True), nullable=False, comment="Sunday 23:59:59.999 UTC"),
        sa.Column("metrics", sa.Text(), nullable=False),
        sa.Column("phase", sa.String(32), nullable=False),
        sa.Column("phase_confidence", sa.Integer(), nullable=False, comment="0–100"),
        sa.Column("generated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_complete", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "week_start", name="uq_weekly_summary_user_week"),
    )
    op.create_index("ix_weekly_summaries_id", "weekly_summaries", ["id"])
    op.create_index("ix_weekly_summaries_user_id", "weekly_summaries", ["user_id"])
    op.create_index("ix_weekly_summaries_week_start", "weekly_summaries", ["week_start"])


def downgrade() -> None:
    op.drop_index("ix_weekly_summaries_week_start", table_name="weekly_summaries")
    op.drop_index("ix_weekly_summaries_user_id", table_name="weekly_summaries")
    op.drop_index("ix_weekly_summaries_id", table_name="weekly_summaries")
    op.drop_table("weekly_summaries")

    op.drop_index("ix_log_entries_user_timestamp", table_name="log_entries")
    op.drop_index("ix_log_entries_id", table_name="log_entries")
    op.drop_table("log_entries")

    op.drop_index("ix_users_external_id", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")

    sa.Enum(name="log_sentiment_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="log_category_enum").drop(op.get_bind(), checkfirst=True)
