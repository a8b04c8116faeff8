"""
Mood request / response schemas.

POST   /mood              MoodCreate          -> MoodEntryResponse
GET    /mood              (query)             -> list[MoodEntryResponse]
GET    /mood/stats        (query)             -> ScoreStatsResponse | IntensityStatsResponse
GET    /mood/vocabulary                       -> VocabularyResponse
DELETE /mood/{id}                             -> SuccessResponse
"""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from moodlog.services.vocabulary import INTENSITY_MAX, INTENSITY_MIN, SCORE_MAX, SCORE_MIN


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

class MoodCreate(BaseModel):
    """One mood entry. Exactly one of `score` (current scale) or `intensity` (legacy)."""

    emoji: Annotated[str, Field(min_length=1, max_length=16, examples=["😄"])]
    label: Annotated[str, Field(min_length=1, max_length=64, examples=["Super Good"])]
    score: Optional[int] = Field(
        default=None,
        ge=SCORE_MIN,
        le=SCORE_MAX,
        description="Five-point mood score, -2 (Very Bad) to +2 (Super Good).",
        examples=[2],
    )
    intensity: Optional[int] = Field(
        default=None,
        ge=INTENSITY_MIN,
        le=INTENSITY_MAX,
        description="Legacy 1-10 intensity paired with a free-form emotion.",
    )
    notes: Optional[str] = Field(default=None, max_length=5_000)
    date: Optional[datetime] = Field(
        default=None,
        description="When the mood was felt. Defaults to now (UTC). Must not be in the future.",
        examples=["2026-02-20T08:30:00Z"],
    )

    @field_validator("emoji", "label", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("must not be empty after stripping whitespace")
        return stripped

    @model_validator(mode="after")
    def one_generation(self) -> "MoodCreate":
        if self.score is None and self.intensity is None:
            raise ValueError("either score or intensity is required")
        if self.score is not None and self.intensity is not None:
            raise ValueError("provide score or intensity, not both")
        return self


class MoodEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    emoji: str
    label: str
    score: Optional[int] = None
    intensity: Optional[int] = None
    notes: Optional[str] = None
    created_at: str = Field(description="ISO timestamp of creation.")


# ---------------------------------------------------------------------------
# Stats
# ---------------------------------------------------------------------------

class MoodFrequencyOut(BaseModel):
    emoji: str
    label: str
    count: int


class TrendPointOut(BaseModel):
    date: str = Field(description="Calendar day, YYYY-MM-DD.")
    avgValue: float


class _StatsBase(BaseModel):
    totalEntries: int
    mostFrequentMood: Optional[MoodFrequencyOut]
    moodFrequency: list[MoodFrequencyOut] = Field(
        description="One row per distinct emoji, most frequent first."
    )
    dailyTrend: list[TrendPointOut] = Field(
        description="Per-day average, oldest first. Days without entries are omitted."
    )


class ScoreStatsResponse(_StatsBase):
    avgScore: float = Field(examples=[0.7])


class IntensityStatsResponse(_StatsBase):
    avgIntensity: float = Field(examples=[6.5])


# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

class ScoreVocabularyOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    score: int
    emoji: str
    label: str
    color: str


class LegacyEmotionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    emoji: str
    label: str
    color: str


class VocabularyResponse(BaseModel):
    scores: list[ScoreVocabularyOut]
    legacy: list[LegacyEmotionOut]
