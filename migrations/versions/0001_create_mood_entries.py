"""create mood_entries (intensity generation)

Revision ID: 0001
Revises:
Create Date: 2025-11-02 00:00:00.000000

First generation: free-form emotion + 1..10 intensity.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "mood_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("emoji", sa.String(16), nullable=False),
        sa.Column("label", sa.String(64), nullable=False),
        sa.Column("intensity", sa.SmallInteger(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("intensity BETWEEN 1 AND 10", name="ck_mood_entries_intensity_range"),
    )
    op.create_index("ix_mood_entries_id", "mood_entries", ["id"])
    op.create_index("ix_mood_entries_created_at", "mood_entries", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_mood_entries_created_at", table_name="mood_entries")
    op.drop_index("ix_mood_entries_id", table_name="mood_entries")
    op.drop_table("mood_entries")
