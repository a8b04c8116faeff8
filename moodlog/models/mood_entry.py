"""
MoodEntry: one logged mood.

Two schema generations share the table:
  intensity  1..10 with a free-form emotion (legacy palette)
  score     -2..2  on the five-point scale
Rows written today carry exactly one of the two; the other column is NULL.
Rows are never updated, only inserted and deleted.
"""
from datetime import datetime
from sqlalchemy import Integer, SmallInteger, String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from moodlog.db.base import Base


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    emoji: Mapped[str] = mapped_column(String(16), nullable=False)
    label: Mapped[str] = mapped_column(String(64), nullable=False)
    score: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    intensity: Mapped[int | None] = mapped_column(SmallInteger, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
