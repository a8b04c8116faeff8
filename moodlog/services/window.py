"""
Time-window policies for listing and aggregating mood entries.

DayCount(days)          created_at >= now - days
DateRange(start, end)   start 00:00 <= created_at < (end + 1 day) 00:00   (inclusive dates)
AllTime                 no filter

All bounds are UTC. Naive timestamps coming back from the store are treated
as UTC.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from moodlog.core.errors import MoodValidationError

# Upper bound for rolling windows, about a century.
MAX_DAYS = 36500


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _start_of(d: date) -> datetime:
    return datetime.combine(d, time.min, tzinfo=timezone.utc)


@dataclass(frozen=True)
class DayCount:
    days: int

    def bounds(self, now: Optional[datetime] = None) -> tuple[Optional[datetime], Optional[datetime]]:
        return (now or utcnow()) - timedelta(days=self.days), None

    def describe(self) -> str:
        return f"last {self.days} days"


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise MoodValidationError(
                f"startDate {self.start} is after endDate {self.end}.", field="startDate"
            )

    def bounds(self, now: Optional[datetime] = None) -> tuple[Optional[datetime], Optional[datetime]]:
        return _start_of(self.start), _start_of(self.end + timedelta(days=1))

    def describe(self) -> str:
        return f"{self.start} to {self.end}"


@dataclass(frozen=True)
class AllTime:
    def bounds(self, now: Optional[datetime] = None) -> tuple[Optional[datetime], Optional[datetime]]:
        return None, None

    def describe(self) -> str:
        return "all time"


Window = Union[DayCount, DateRange, AllTime]


def contains(window: Window, ts: datetime, now: Optional[datetime] = None) -> bool:
    """In-process version of the filter the store applies in SQL."""
    since, until = window.bounds(now)
    ts = as_utc(ts)
    if since is not None and ts < since:
        return False
    if until is not None and ts >= until:
        return False
    return True


def resolve_window(
    days: Optional[int] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    default_days: Optional[int] = None,
) -> Window:
    """
    Pick the window for a request.
    An explicit start/end pair takes precedence over `days`. With neither,
    `default_days` applies; `default_days=None` means no filter at all.
    """
    if start is not None or end is not None:
        if start is None or end is None:
            raise MoodValidationError(
                "startDate and endDate must be supplied together.",
                field="startDate" if start is None else "endDate",
            )
        return DateRange(start=start, end=end)

    if days is None:
        days = default_days
    if days is None:
        return AllTime()
    if days < 1:
        raise MoodValidationError("days must be at least 1.", field="days")
    if days > MAX_DAYS:
        raise MoodValidationError(f"days must be at most {MAX_DAYS}.", field="days")
    return DayCount(days=days)
