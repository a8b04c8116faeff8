"""
Mood vocabulary: static display metadata for both schema generations.

Score scale (current)          Legacy palette (intensity generation)
-----------------------        -------------------------------------
 2  😄  Super Good              10 free-form emotions, looked up by emoji
 1  🙂  Good
 0  😐  Neutral
-1  😕  Bad
-2  😞  Very Bad

Lookups never fail: an unknown score resolves to the Neutral entry and an
unknown legacy emoji resolves to the neutral grey, so historical rows with
unexpected values still render.

Public API
----------
label_for(score)          -> VocabularyEntry
legacy_label_for(emoji)   -> LegacyEmotion
nearest_score(avg)        -> int   (scale point closest to an average)
format_score(score)       -> str   ("+2", "0", "-1")
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

SCORE_MIN = -2
SCORE_MAX = 2
INTENSITY_MIN = 1
INTENSITY_MAX = 10

NEUTRAL_COLOR = "#9E9E9E"


@dataclass(frozen=True)
class VocabularyEntry:
    score: int
    emoji: str
    label: str
    color: str


@dataclass(frozen=True)
class LegacyEmotion:
    emoji: str
    label: str
    color: str


SCORE_VOCABULARY: tuple[VocabularyEntry, ...] = (
    VocabularyEntry(2, "😄", "Super Good", "#22C55E"),
    VocabularyEntry(1, "🙂", "Good", "#84CC16"),
    VocabularyEntry(0, "😐", "Neutral", NEUTRAL_COLOR),
    VocabularyEntry(-1, "😕", "Bad", "#F97316"),
    VocabularyEntry(-2, "😞", "Very Bad", "#EF4444"),
)

LEGACY_PALETTE: tuple[LegacyEmotion, ...] = (
    LegacyEmotion("😊", "Happy", "#FFD93D"),
    LegacyEmotion("😌", "Calm", "#6BCB77"),
    LegacyEmotion("😐", "Neutral", NEUTRAL_COLOR),
    LegacyEmotion("😔", "Sad", "#4D96FF"),
    LegacyEmotion("😰", "Anxious", "#FF6B6B"),
    LegacyEmotion("😤", "Frustrated", "#FF8C32"),
    LegacyEmotion("😍", "Loved", "#FF69B4"),
    LegacyEmotion("😴", "Tired", "#8B7EC8"),
    LegacyEmotion("🤯", "Overwhelmed", "#E84393"),
    LegacyEmotion("🥳", "Excited", "#00D2D3"),
)

_BY_SCORE: dict[int, VocabularyEntry] = {v.score: v for v in SCORE_VOCABULARY}
NEUTRAL_ENTRY = _BY_SCORE[0]


def label_for(score: Optional[int]) -> VocabularyEntry:
    """Exact match on the five-point table; anything else is Neutral."""
    if score is None:
        return NEUTRAL_ENTRY
    return _BY_SCORE.get(score, NEUTRAL_ENTRY)


def legacy_label_for(emoji: str) -> LegacyEmotion:
    """
    Linear scan of the legacy palette. A miss keeps the caller's emoji but
    paints it neutral grey with an empty label.
    """
    for emotion in LEGACY_PALETTE:
        if emotion.emoji == emoji:
            return emotion
    return LegacyEmotion(emoji=emoji, label="", color=NEUTRAL_COLOR)


def nearest_score(value: float) -> int:
    """Round an average to the closest point on the scale (half away from zero), clamped."""
    rounded = int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(SCORE_MIN, min(SCORE_MAX, rounded))


def format_score(score: float | int) -> str:
    return f"+{score}" if score > 0 else f"{score}"
