"""
Mood router.

POST   /mood                log one entry
GET    /mood                entries, newest first
GET    /mood/stats          aggregated statistics for a window
GET    /mood/vocabulary     display metadata for both schema generations
DELETE /mood/{id}           delete one entry
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from moodlog.core.config import Settings, settings
from moodlog.db.base import get_db
from moodlog.models.mood_entry import MoodEntry
from moodlog.schemas.common import ErrorResponse, SuccessResponse
from moodlog.schemas.mood import (
    IntensityStatsResponse,
    MoodCreate,
    MoodEntryResponse,
    ScoreStatsResponse,
    VocabularyResponse,
)
from moodlog.services.stats import Generation, compute_stats
from moodlog.services.store import MoodStore, NewMoodEntry
from moodlog.services.vocabulary import LEGACY_PALETTE, SCORE_VOCABULARY
from moodlog.services.window import MAX_DAYS, resolve_window

router = APIRouter(prefix="/mood", tags=["mood"])

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    500: {"model": ErrorResponse, "description": "Store failure"},
}


def get_settings() -> Settings:
    return settings


def get_store(db: Session = Depends(get_db)) -> MoodStore:
    return MoodStore(db)


# ---------------------------------------------------------------------------
# Serialization helper
# ---------------------------------------------------------------------------

def _entry_to_response(entry: MoodEntry) -> MoodEntryResponse:
    return MoodEntryResponse(
        id=entry.id,
        emoji=entry.emoji,
        label=entry.label,
        score=entry.score,
        intensity=entry.intensity,
        notes=entry.notes,
        created_at=entry.created_at.isoformat() if entry.created_at else "",
    )


# ---------------------------------------------------------------------------
# POST /mood
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=MoodEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Log a mood entry",
    responses=_ERRORS,
)
def create_mood(payload: MoodCreate, store: MoodStore = Depends(get_store)):
    """
    Persist one entry. `date` defaults to now (UTC) and is rejected when it
    lies in the future.
    """
    entry = store.create(NewMoodEntry(
        emoji=payload.emoji,
        label=payload.label,
        score=payload.score,
        intensity=payload.intensity,
        notes=payload.notes,
        created_at=payload.date,
    ))
    return _entry_to_response(entry)


# ---------------------------------------------------------------------------
# GET /mood
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=list[MoodEntryResponse],
    summary="Mood history, newest first",
    responses=_ERRORS,
)
def list_moods(
    days: Optional[int] = Query(default=None, ge=1, le=MAX_DAYS, description="Rolling window in days."),
    start_date: Optional[date] = Query(default=None, alias="startDate", examples=["2024-01-01"]),
    end_date: Optional[date] = Query(default=None, alias="endDate", examples=["2024-01-31"]),
    store: MoodStore = Depends(get_store),
):
    """
    Return entries in the requested window. `startDate`+`endDate` (inclusive)
    take precedence over `days`; with neither, the whole history is returned.
    """
    window = resolve_window(days=days, start=start_date, end=end_date)
    return [_entry_to_response(e) for e in store.list(window, ascending=False)]


# ---------------------------------------------------------------------------
# GET /mood/stats
# ---------------------------------------------------------------------------

@router.get(
    "/stats",
    response_model=Union[ScoreStatsResponse, IntensityStatsResponse],
    summary="Aggregated mood statistics",
    responses=_ERRORS,
)
def mood_stats(
    days: Optional[int] = Query(default=None, ge=1, le=MAX_DAYS, description="Rolling window in days."),
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    generation: Optional[Generation] = Query(
        default=None,
        description="Schema generation to aggregate. Defaults to the configured one.",
    ),
    store: MoodStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    """
    Compute total, average, frequency histogram and daily trend.

    The window defaults to the last `STATS_DEFAULT_DAYS` (30) days. The
    average is reported as `avgScore` or `avgIntensity` depending on the
    generation.
    """
    window = resolve_window(
        days=days, start=start_date, end=end_date, default_days=config.STATS_DEFAULT_DAYS
    )
    gen = generation or Generation(config.MOOD_GENERATION)
    stats = compute_stats(store.list(window, ascending=True), gen)
    if gen == Generation.intensity:
        return IntensityStatsResponse(**stats.to_dict())
    return ScoreStatsResponse(**stats.to_dict())


# ---------------------------------------------------------------------------
# GET /mood/vocabulary
# ---------------------------------------------------------------------------

@router.get(
    "/vocabulary",
    response_model=VocabularyResponse,
    summary="Display metadata for scores and the legacy emotion palette",
)
def vocabulary():
    return VocabularyResponse(
        scores=[asdict(v) for v in SCORE_VOCABULARY],
        legacy=[asdict(e) for e in LEGACY_PALETTE],
    )


# ---------------------------------------------------------------------------
# DELETE /mood/{id}
# ---------------------------------------------------------------------------

@router.delete(
    "/{entry_id}",
    response_model=SuccessResponse,
    summary="Delete a mood entry",
    responses={500: _ERRORS[500]},
)
def delete_mood(entry_id: int, store: MoodStore = Depends(get_store)):
    """Deleting an id that does not exist is a no-op and still reports success."""
    store.delete_by_id(entry_id, missing_ok=True)
    return SuccessResponse(success=True)
