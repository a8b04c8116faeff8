"""
Tests for the entry store against the SQLite test database.
"""
from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from conftest import ago, utc
from moodlog.core.errors import EntryNotFoundError, MoodValidationError, StoreError
from moodlog.services.store import MoodStore, NewMoodEntry, validate_new_entry
from moodlog.services.window import AllTime, DateRange, DayCount


def _scored(score=1, **kwargs) -> NewMoodEntry:
    return NewMoodEntry(emoji="🙂", label="Good", score=score, **kwargs)


class TestCreate:
    def test_create_assigns_id_and_timestamp(self, db):
        entry = MoodStore(db).create(_scored(notes="coffee"))
        assert entry.id > 0
        assert entry.created_at is not None
        assert entry.notes == "coffee"
        assert entry.intensity is None

    def test_create_with_explicit_timestamp(self, db):
        entry = MoodStore(db).create(_scored(created_at=utc(2024, 1, 15, 10, 0)))
        assert entry.created_at.date() == date(2024, 1, 15)

    def test_legacy_intensity_entry(self, db):
        entry = MoodStore(db).create(NewMoodEntry(emoji="😊", label="Happy", intensity=8))
        assert entry.intensity == 8
        assert entry.score is None

    def test_ids_are_distinct(self, db):
        store = MoodStore(db)
        ids = {store.create(_scored()).id for _ in range(3)}
        assert len(ids) == 3

    def test_invalid_entry_is_not_persisted(self, db):
        store = MoodStore(db)
        with pytest.raises(MoodValidationError):
            store.create(_scored(score=5))
        assert store.list(AllTime()) == []


class TestValidation:
    @pytest.mark.parametrize("score", [-3, 3, 10])
    def test_score_out_of_range(self, score):
        with pytest.raises(MoodValidationError) as exc:
            validate_new_entry(_scored(score=score))
        assert exc.value.details["field"] == "score"

    @pytest.mark.parametrize("intensity", [0, 11, -1])
    def test_intensity_out_of_range(self, intensity):
        with pytest.raises(MoodValidationError) as exc:
            validate_new_entry(NewMoodEntry(emoji="😊", label="Happy", intensity=intensity))
        assert exc.value.details["field"] == "intensity"

    @pytest.mark.parametrize("score", [-2, -1, 0, 1, 2])
    def test_score_bounds_accepted(self, score):
        validate_new_entry(_scored(score=score))

    def test_needs_score_or_intensity(self):
        with pytest.raises(MoodValidationError):
            validate_new_entry(NewMoodEntry(emoji="🙂", label="Good"))

    def test_rejects_both_generations(self):
        with pytest.raises(MoodValidationError):
            validate_new_entry(NewMoodEntry(emoji="🙂", label="Good", score=1, intensity=5))

    def test_rejects_blank_emoji(self):
        with pytest.raises(MoodValidationError):
            validate_new_entry(NewMoodEntry(emoji="  ", label="Good", score=1))

    def test_rejects_future_entry(self):
        with pytest.raises(MoodValidationError) as exc:
            validate_new_entry(_scored(created_at=ago(days=-1)))
        assert exc.value.details["field"] == "date"


class TestList:
    def _seed(self, db):
        store = MoodStore(db)
        store.create(_scored(score=2, created_at=utc(2023, 12, 31, 23, 0)))
        store.create(_scored(score=1, created_at=utc(2024, 1, 1, 0, 0)))
        store.create(_scored(score=0, created_at=utc(2024, 1, 31, 23, 59)))
        store.create(_scored(score=-1, created_at=utc(2024, 2, 1, 0, 0)))
        store.create(_scored(score=-2, created_at=ago(days=2)))
        return store

    def test_date_range_inclusive(self, db):
        store = self._seed(db)
        entries = store.list(DateRange(start=date(2024, 1, 1), end=date(2024, 1, 31)))
        assert [e.score for e in entries] == [0, 1]

    def test_day_count(self, db):
        store = self._seed(db)
        entries = store.list(DayCount(days=7))
        assert [e.score for e in entries] == [-2]

    def test_ascending_and_descending(self, db):
        store = self._seed(db)
        asc = [e.score for e in store.list(AllTime(), ascending=True)]
        desc = [e.score for e in store.list(AllTime(), ascending=False)]
        assert asc == [2, 1, 0, -1, -2]
        assert desc == list(reversed(asc))


class TestDelete:
    def test_delete_existing_removes_it(self, db):
        store = MoodStore(db)
        keep = store.create(_scored())
        gone = store.create(_scored())
        assert store.delete_by_id(gone.id) is True
        assert [e.id for e in store.list(AllTime())] == [keep.id]

    def test_delete_missing_is_noop(self, db):
        assert MoodStore(db).delete_by_id(999_999) is False

    def test_delete_missing_strict(self, db):
        with pytest.raises(EntryNotFoundError):
            MoodStore(db).delete_by_id(999_999, missing_ok=False)

    def test_delete_looks_up_through_get(self, db, monkeypatch):
        store = MoodStore(db)
        entry = store.create(_scored())
        seen = []
        real_get = MoodStore.get

        def spy(self, entry_id, operation="get"):
            seen.append((entry_id, operation))
            return real_get(self, entry_id, operation)

        monkeypatch.setattr(MoodStore, "get", spy)
        assert store.delete_by_id(entry.id) is True
        assert store.delete_by_id(entry.id) is False
        assert seen == [(entry.id, "delete"), (entry.id, "delete")]

    def test_get_missing(self, db):
        with pytest.raises(EntryNotFoundError):
            MoodStore(db).get(424242)


class TestStoreFailures:
    def _broken_session(self):
        session = MagicMock()
        boom = OperationalError("SELECT", {}, Exception("connection refused"))
        session.scalars.side_effect = boom
        session.commit.side_effect = boom
        return session

    def test_list_failure_becomes_store_error(self):
        session = self._broken_session()
        with pytest.raises(StoreError) as exc:
            MoodStore(session).list(DayCount(days=7))
        assert exc.value.details["operation"] == "list"
        session.rollback.assert_called_once()

    def test_create_failure_becomes_store_error(self):
        session = self._broken_session()
        with pytest.raises(StoreError):
            MoodStore(session).create(_scored(created_at=ago(days=1) - timedelta(hours=1)))
        session.rollback.assert_called_once()
