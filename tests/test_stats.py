"""
Unit tests for the stats aggregator. Pure: no database.
"""
from datetime import date, datetime, timezone

import pytest

from moodlog.services.stats import (
    Generation,
    LegacyEntry,
    ScoredEntry,
    classify,
    compute_stats,
    entry_value,
    round_half_away,
)
from moodlog.services.window import DateRange


def scored(emoji, score, ts="2024-01-01T10:00:00+00:00", label=None):
    return ScoredEntry(emoji=emoji, label=label or emoji, score=score, created_at=ts)


def legacy(emoji, intensity, ts="2024-01-01T10:00:00+00:00", label=None):
    return LegacyEntry(emoji=emoji, label=label or emoji, intensity=intensity, created_at=ts)


class TestEmptyInput:
    def test_empty_window_is_all_zero(self):
        stats = compute_stats([], Generation.score)
        assert stats.to_dict() == {
            "totalEntries": 0,
            "avgScore": 0,
            "mostFrequentMood": None,
            "moodFrequency": [],
            "dailyTrend": [],
        }

    def test_empty_intensity_uses_intensity_key(self):
        d = compute_stats([], Generation.intensity).to_dict()
        assert d["avgIntensity"] == 0
        assert "avgScore" not in d


class TestAverage:
    def test_average_rounded_to_one_decimal(self):
        entries = [scored("😄", 2), scored("🙂", 1), scored("🙂", 1)]
        assert compute_stats(entries).average == 1.3

    def test_half_rounds_away_from_zero(self):
        assert round_half_away(1, 4) == 0.3      # 0.25
        assert round_half_away(-1, 4) == -0.3    # -0.25
        assert round_half_away(3, 20) == 0.2     # 0.15

    def test_negative_zero_is_plain_zero(self):
        assert str(round_half_away(-1, 30)) == "0.0"

    def test_null_score_counts_as_zero(self):
        entries = [scored("😄", 2), scored("😐", None)]
        assert compute_stats(entries).average == 1.0

    def test_intensity_generation(self):
        entries = [legacy("😊", 7), legacy("😔", 4)]
        stats = compute_stats(entries, Generation.intensity)
        assert stats.average == 5.5
        assert stats.to_dict()["avgIntensity"] == 5.5

    def test_average_is_order_independent(self):
        entries = [scored("😄", 2), scored("😞", -2), scored("🙂", 1)]
        assert compute_stats(entries).average == compute_stats(entries[::-1]).average


class TestFrequency:
    def test_sorted_by_count_desc(self):
        entries = [scored("😄", 2), scored("😐", 0), scored("😐", 0)]
        rows = compute_stats(entries).mood_frequency
        assert [(r.emoji, r.count) for r in rows] == [("😐", 2), ("😄", 1)]

    def test_ties_keep_first_seen_order(self):
        entries = [scored("😀", 2), scored("😐", 0), scored("😐", 0), scored("😀", 2)]
        rows = compute_stats(entries).mood_frequency
        assert [(r.emoji, r.count) for r in rows] == [("😀", 2), ("😐", 2)]

    def test_label_comes_from_first_entry_for_emoji(self):
        entries = [
            scored("🙂", 1, label="Good"),
            scored("🙂", 1, label="Fine"),
        ]
        stats = compute_stats(entries)
        assert stats.mood_frequency[0].label == "Good"
        assert stats.mood_frequency[0].count == 2

    def test_most_frequent_is_first_row(self):
        entries = [scored("😕", -1), scored("😄", 2), scored("😄", 2)]
        top = compute_stats(entries).to_dict()["mostFrequentMood"]
        assert top == {"emoji": "😄", "label": "😄", "count": 2}


class TestDailyTrend:
    def test_days_without_entries_are_omitted(self):
        entries = [
            scored("😄", 2, ts="2024-01-01T09:00:00+00:00"),
            scored("😕", -1, ts="2024-01-03T09:00:00+00:00"),
        ]
        trend = compute_stats(entries).to_dict()["dailyTrend"]
        assert trend == [
            {"date": "2024-01-01", "avgValue": 2.0},
            {"date": "2024-01-03", "avgValue": -1.0},
        ]

    def test_sorted_ascending_even_if_input_is_not(self):
        entries = [
            scored("😄", 2, ts="2024-01-05T09:00:00+00:00"),
            scored("😕", -1, ts="2024-01-02T09:00:00+00:00"),
        ]
        dates = [p.date for p in compute_stats(entries).daily_trend]
        assert dates == ["2024-01-02", "2024-01-05"]

    def test_per_day_average(self):
        entries = [
            scored("😄", 2, ts="2024-01-01T08:00:00+00:00"),
            scored("🙂", 1, ts="2024-01-01T12:00:00+00:00"),
            scored("🙂", 1, ts="2024-01-01T20:00:00+00:00"),
        ]
        assert compute_stats(entries).daily_trend[0].avg_value == 1.3

    def test_date_component_is_not_timezone_adjusted(self):
        entries = [scored("😄", 2, ts="2024-01-01T23:30:00-05:00")]
        assert compute_stats(entries).daily_trend[0].date == "2024-01-01"

    def test_datetime_timestamps(self):
        entries = [scored("😄", 2, ts=datetime(2024, 1, 2, 7, 0, tzinfo=timezone.utc))]
        assert compute_stats(entries).daily_trend[0].date == "2024-01-02"


class TestTaggedVariant:
    def test_classify_dict_rows(self):
        assert isinstance(classify({"emoji": "😊", "label": "Happy", "intensity": 6}), LegacyEntry)
        assert isinstance(classify({"emoji": "😄", "label": "Super Good", "score": 2}), ScoredEntry)

    def test_row_with_neither_is_scored_zero(self):
        entry = classify({"emoji": "😐", "label": "Neutral"})
        assert isinstance(entry, ScoredEntry)
        assert entry_value(entry, Generation.score) == 0

    def test_other_generation_counts_as_zero(self):
        assert entry_value(legacy("😊", 8), Generation.score) == 0
        assert entry_value(scored("😄", 2), Generation.intensity) == 0

    def test_generation_accepts_string(self):
        stats = compute_stats([legacy("😊", 8)], "intensity")
        assert stats.generation == Generation.intensity


class TestWindowFilter:
    def test_in_process_window(self):
        entries = [
            scored("😄", 2, ts="2023-12-31T12:00:00+00:00"),
            scored("🙂", 1, ts="2024-01-15T12:00:00+00:00"),
            scored("😞", -2, ts="2024-02-01T00:00:00+00:00"),
        ]
        window = DateRange(start=date(2024, 1, 1), end=date(2024, 1, 31))
        stats = compute_stats(entries, window=window)
        assert stats.total_entries == 1
        assert stats.average == 1.0

    @pytest.mark.parametrize("generation", list(Generation))
    def test_deterministic(self, generation):
        entries = [scored("😄", 2), legacy("😊", 5), scored("😕", -1)]
        assert compute_stats(entries, generation).to_dict() == compute_stats(entries, generation).to_dict()
