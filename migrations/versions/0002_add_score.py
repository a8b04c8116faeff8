"""add five-point score, make intensity optional

Revision ID: 0002
Revises: 0001
Create Date: 2026-01-14

Second generation: score -2..2. Existing rows keep their intensity and get
a NULL score; new rows carry a score and a NULL intensity.
Downgrade deletes score-only rows, since the old schema cannot hold them.
"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("mood_entries", sa.Column("score", sa.SmallInteger(), nullable=True))
    with op.batch_alter_table("mood_entries") as batch:
        batch.alter_column("intensity", existing_type=sa.SmallInteger(), nullable=True)
        batch.create_check_constraint(
            "ck_mood_entries_score_range", "score IS NULL OR score BETWEEN -2 AND 2"
        )


def downgrade() -> None:
    op.execute("DELETE FROM mood_entries WHERE intensity IS NULL")
    with op.batch_alter_table("mood_entries") as batch:
        batch.drop_constraint("ck_mood_entries_score_range", type_="check")
        batch.alter_column("intensity", existing_type=sa.SmallInteger(), nullable=False)
    op.drop_column("mood_entries", "score")
