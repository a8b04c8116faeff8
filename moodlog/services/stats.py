"""
Stats aggregator: raw mood log -> summary statistics.

Pure functions over already-fetched entries; no session, no I/O.

Algorithm
---------
1. Optional in-process window filter (the store normally filters in SQL).
2. Average of the generation's value, rounded to 1 decimal.
3. Frequency histogram grouped by exact emoji, count desc, ties keep
   first-seen order; the label is the one on the first entry seen.
4. Daily trend grouped by the date component of the stored timestamp,
   ascending, one row per day that has entries.

Rounding is half away from zero and applied once per aggregate.

Public API
----------
classify(row)                                     -> ScoredEntry | LegacyEntry
entry_value(entry, generation)                    -> int
compute_stats(entries, generation, window, now)   -> MoodStats
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Optional, Union

from moodlog.services.window import Window, contains


class Generation(str, enum.Enum):
    score = "score"
    intensity = "intensity"


# ---------------------------------------------------------------------------
# Tagged variant
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoredEntry:
    emoji: str
    label: str
    score: Optional[int]
    created_at: Union[datetime, str]


@dataclass(frozen=True)
class LegacyEntry:
    emoji: str
    label: str
    intensity: Optional[int]
    created_at: Union[datetime, str]


AggregateEntry = Union[ScoredEntry, LegacyEntry]


def _get(row: Any, name: str) -> Any:
    if isinstance(row, dict):
        return row.get(name)
    return getattr(row, name, None)


def classify(row: Any) -> AggregateEntry:
    """
    Map an ORM row, dict or variant to its generation.
    A row with an intensity and no score is legacy; everything else is scored.
    """
    if isinstance(row, (ScoredEntry, LegacyEntry)):
        return row
    score = _get(row, "score")
    intensity = _get(row, "intensity")
    common = dict(
        emoji=_get(row, "emoji"),
        label=_get(row, "label"),
        created_at=_get(row, "created_at"),
    )
    if score is None and intensity is not None:
        return LegacyEntry(intensity=intensity, **common)
    return ScoredEntry(score=score, **common)


def entry_value(entry: AggregateEntry, generation: Generation) -> int:
    """The single numeric value aggregated for `entry`; absent means 0."""
    if generation == Generation.intensity:
        value = entry.intensity if isinstance(entry, LegacyEntry) else None
    else:
        value = entry.score if isinstance(entry, ScoredEntry) else None
    return value or 0


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class MoodFrequency:
    emoji: str
    label: str
    count: int

    def to_dict(self) -> dict:
        return {"emoji": self.emoji, "label": self.label, "count": self.count}


@dataclass
class TrendPoint:
    date: str           # YYYY-MM-DD
    avg_value: float

    def to_dict(self) -> dict:
        return {"date": self.date, "avgValue": self.avg_value}


@dataclass
class MoodStats:
    generation: Generation
    total_entries: int = 0
    average: float = 0.0
    mood_frequency: list[MoodFrequency] = field(default_factory=list)
    daily_trend: list[TrendPoint] = field(default_factory=list)

    @property
    def most_frequent_mood(self) -> Optional[MoodFrequency]:
        return self.mood_frequency[0] if self.mood_frequency else None

    @property
    def average_key(self) -> str:
        return "avgIntensity" if self.generation == Generation.intensity else "avgScore"

    def to_dict(self) -> dict:
        top = self.most_frequent_mood
        return {
            "totalEntries": self.total_entries,
            self.average_key: self.average,
            "mostFrequentMood": top.to_dict() if top else None,
            "moodFrequency": [f.to_dict() for f in self.mood_frequency],
            "dailyTrend": [p.to_dict() for p in self.daily_trend],
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def round_half_away(total: int, count: int) -> float:
    """total / count to 1 decimal, half away from zero. count == 0 gives 0."""
    if count == 0:
        return 0.0
    q = (Decimal(total) / Decimal(count)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    # Decimal keeps the sign of -0.0
    return float(q) or 0.0


def day_key(created_at: Union[datetime, str]) -> str:
    """Calendar date of the stored timestamp, without timezone conversion."""
    if isinstance(created_at, datetime):
        return created_at.date().isoformat()
    return str(created_at).replace(" ", "T").split("T")[0]


def _timestamp(created_at: Union[datetime, str]) -> datetime:
    if isinstance(created_at, datetime):
        return created_at
    return datetime.fromisoformat(str(created_at).replace("Z", "+00:00"))


# ---------------------------------------------------------------------------
# Aggregation steps
# ---------------------------------------------------------------------------

def mood_frequency(entries: list[AggregateEntry]) -> list[MoodFrequency]:
    groups: dict[str, MoodFrequency] = {}
    for e in entries:
        row = groups.get(e.emoji)
        if row is None:
            groups[e.emoji] = MoodFrequency(emoji=e.emoji, label=e.label, count=1)
        else:
            row.count += 1
    # sorted() is stable and dicts keep insertion order: ties stay first-seen.
    return sorted(groups.values(), key=lambda r: r.count, reverse=True)


def daily_trend(entries: list[AggregateEntry], generation: Generation) -> list[TrendPoint]:
    days: dict[str, list[int]] = {}
    for e in entries:
        days.setdefault(day_key(e.created_at), []).append(entry_value(e, generation))
    return [
        TrendPoint(date=d, avg_value=round_half_away(sum(values), len(values)))
        for d, values in sorted(days.items())
    ]


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def compute_stats(
    entries: Iterable[Any],
    generation: Generation | str = Generation.score,
    window: Optional[Window] = None,
    now: Optional[datetime] = None,
) -> MoodStats:
    """
    Aggregate `entries` for one schema generation.

    `entries` may be ORM rows, dicts or tagged variants. When `window` is
    given, entries outside it are dropped first. Empty input is not an error:
    it yields zero totals, a 0 average and empty sequences.
    """
    generation = Generation(generation)
    items = [classify(row) for row in entries]
    if window is not None:
        items = [e for e in items if contains(window, _timestamp(e.created_at), now)]

    if not items:
        return MoodStats(generation=generation)

    total = sum(entry_value(e, generation) for e in items)
    return MoodStats(
        generation=generation,
        total_entries=len(items),
        average=round_half_away(total, len(items)),
        mood_frequency=mood_frequency(items),
        daily_trend=daily_trend(items, generation),
    )
