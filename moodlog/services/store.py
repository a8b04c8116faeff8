"""
Entry store: create / list / delete mood entries.

Public API
----------
MoodStore(db).create(NewMoodEntry)            -> MoodEntry   (validates, commits)
MoodStore(db).list(window, ascending)         -> list[MoodEntry]
MoodStore(db).get(entry_id)                   -> MoodEntry
MoodStore(db).delete_by_id(entry_id, ...)     -> bool

Every read goes to the database; nothing is cached between calls.
SQLAlchemy failures roll back the session and surface as StoreError.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from moodlog.core.errors import EntryNotFoundError, MoodValidationError, StoreError
from moodlog.models.mood_entry import MoodEntry
from moodlog.services.vocabulary import INTENSITY_MAX, INTENSITY_MIN, SCORE_MAX, SCORE_MIN
from moodlog.services.window import AllTime, Window, as_utc, utcnow

logger = structlog.get_logger()


@dataclass
class NewMoodEntry:
    """Lightweight DTO so the store stays schema-agnostic."""
    emoji: str
    label: str
    score: Optional[int] = None
    intensity: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


def validate_new_entry(item: NewMoodEntry, now: Optional[datetime] = None) -> None:
    if not (item.emoji or "").strip():
        raise MoodValidationError("emoji is required.", field="emoji")
    if not (item.label or "").strip():
        raise MoodValidationError("label is required.", field="label")

    if item.score is None and item.intensity is None:
        raise MoodValidationError("Either score or intensity is required.", field="score")
    if item.score is not None and item.intensity is not None:
        raise MoodValidationError("Provide score or intensity, not both.", field="score")

    if item.score is not None and not SCORE_MIN <= item.score <= SCORE_MAX:
        raise MoodValidationError(
            f"score must be between {SCORE_MIN} and {SCORE_MAX}.", field="score"
        )
    if item.intensity is not None and not INTENSITY_MIN <= item.intensity <= INTENSITY_MAX:
        raise MoodValidationError(
            f"intensity must be between {INTENSITY_MIN} and {INTENSITY_MAX}.", field="intensity"
        )

    if item.created_at is not None and as_utc(item.created_at) > (now or utcnow()):
        raise MoodValidationError("Mood entries cannot be dated in the future.", field="date")


class MoodStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("store_error", operation=operation, error=str(exc))
            raise StoreError(f"Could not {operation} mood entry: {exc}", operation=operation) from exc

    def create(self, item: NewMoodEntry) -> MoodEntry:
        validate_new_entry(item)
        entry = MoodEntry(
            emoji=item.emoji.strip(),
            label=item.label.strip(),
            score=item.score,
            intensity=item.intensity,
            notes=item.notes or None,
        )
        if item.created_at is not None:
            entry.created_at = as_utc(item.created_at)

        with self._guard("create"):
            self.db.add(entry)
            self.db.commit()
            self.db.refresh(entry)

        logger.info("mood_created", id=entry.id, emoji=entry.emoji, score=entry.score,
                    intensity=entry.intensity)
        return entry

    def list(self, window: Optional[Window] = None, ascending: bool = False) -> list[MoodEntry]:
        """Entries inside `window`, oldest first when `ascending`, newest first otherwise."""
        since, until = (window or AllTime()).bounds()
        stmt = select(MoodEntry)
        if since is not None:
            stmt = stmt.where(MoodEntry.created_at >= since)
        if until is not None:
            stmt = stmt.where(MoodEntry.created_at < until)
        if ascending:
            stmt = stmt.order_by(MoodEntry.created_at.asc(), MoodEntry.id.asc())
        else:
            stmt = stmt.order_by(MoodEntry.created_at.desc(), MoodEntry.id.desc())

        with self._guard("list"):
            return list(self.db.scalars(stmt).all())

    def get(self, entry_id: int, operation: str = "get") -> MoodEntry:
        with self._guard(operation):
            entry = self.db.get(MoodEntry, entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    def delete_by_id(self, entry_id: int, missing_ok: bool = True) -> bool:
        """
        Delete one entry. Returns False when no row had that id; that is a
        no-op rather than an error unless `missing_ok` is False.
        """
        try:
            entry = self.get(entry_id, operation="delete")
        except EntryNotFoundError:
            if not missing_ok:
                raise
            logger.info("mood_delete_missing", id=entry_id)
            return False

        with self._guard("delete"):
            self.db.delete(entry)
            self.db.commit()

        logger.info("mood_deleted", id=entry_id)
        return True
