"""
Mood tools for a conversational agent.

Each tool is (name, JSON input schema, handler). Handlers take the raw
argument dict and return a human-readable string. `MoodTools.call` never
raises: a failure anywhere downstream comes back as
"Error <doing what>: <why>".

Tools
-----
log_mood            emoji, label, score (-2..2), notes?
get_mood_history    days? (7), start_date?, end_date?
get_mood_stats      days? (30), start_date?, end_date?
delete_mood         id
get_dashboard_link  (no input)
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Optional

import structlog

from moodlog.agent.backends import MoodBackend
from moodlog.core.config import Settings
from moodlog.core.errors import MoodLogException
from moodlog.services.stats import Generation
from moodlog.services.vocabulary import (
    SCORE_MAX,
    SCORE_MIN,
    format_score,
    label_for,
    nearest_score,
)
from moodlog.services.window import MAX_DAYS, DateRange, DayCount, Window, resolve_window

logger = structlog.get_logger()

ToolHandler = Callable[[dict], str]


class ToolArgumentError(ValueError):
    """Bad tool input; reported back to the agent as text."""


# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------

def _require_str(args: dict, name: str) -> str:
    value = args.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ToolArgumentError(f"{name} is required")
    return value.strip()


def _int_arg(args: dict, name: str, default: Optional[int] = None) -> Optional[int]:
    value = args.get(name)
    if value is None:
        return default
    # bool is an int subclass; JSON numbers may arrive as 2.0
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != int(value):
        raise ToolArgumentError(f"{name} must be an integer")
    return int(value)


def _date_arg(args: dict, name: str) -> Optional[date]:
    value = args.get(name)
    if value is None:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ToolArgumentError(f"{name} must be a date in YYYY-MM-DD format") from None


def _window_from(args: dict, default_days: int) -> Window:
    return resolve_window(
        days=_int_arg(args, "days"),
        start=_date_arg(args, "start_date"),
        end=_date_arg(args, "end_date"),
        default_days=default_days,
    )


def _scope(window: Window) -> str:
    if isinstance(window, DayCount):
        return f"in the last {window.days} days"
    if isinstance(window, DateRange):
        return f"between {window.start} and {window.end}"
    return "in your history"


def _when(created_at: str) -> str:
    try:
        return datetime.fromisoformat(created_at.replace("Z", "+00:00")).strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return created_at


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

class MoodTools:
    """Binds the tool handlers to a backend and the relevant settings."""

    def __init__(self, backend: MoodBackend, config: Settings):
        self.backend = backend
        self.config = config

    # --- log_mood ---

    def log_mood(self, args: dict) -> str:
        emoji = _require_str(args, "emoji")
        label = _require_str(args, "label")
        score = _int_arg(args, "score")
        if score is None:
            raise ToolArgumentError("score is required")
        if not SCORE_MIN <= score <= SCORE_MAX:
            raise ToolArgumentError(f"score must be between {SCORE_MIN} and {SCORE_MAX}")
        notes = args.get("notes") or None

        entry = self.backend.log(emoji=emoji, label=label, score=score, notes=notes)
        text = f"Logged: {emoji} {label} (score {format_score(score)})"
        if notes:
            text += f' - "{notes}"'
        return f"{text}\nEntry ID: {entry['id']}"

    # --- get_mood_history ---

    def get_mood_history(self, args: dict) -> str:
        window = _window_from(args, self.config.HISTORY_DEFAULT_DAYS)
        entries = self.backend.history(window)
        if not entries:
            return f"No mood entries found {_scope(window)}."

        lines = []
        for e in entries:
            if e.get("score") is not None:
                head = f"{e['emoji']} {label_for(e['score']).label} ({format_score(e['score'])})"
            elif e.get("intensity") is not None:
                head = f"{e['emoji']} {e['label']} (intensity {e['intensity']}/10)"
            else:
                head = f"{e['emoji']} {e['label']}"
            line = f"{head} - {_when(e.get('created_at') or '')}"
            if e.get("notes"):
                line += f"\n   Notes: {e['notes']}"
            lines.append(line)

        header = f"Mood history ({window.describe()}, {len(entries)} entries):"
        return header + "\n\n" + "\n\n".join(lines)

    # --- get_mood_stats ---

    def get_mood_stats(self, args: dict) -> str:
        window = _window_from(args, self.config.STATS_DEFAULT_DAYS)
        generation = Generation(self.config.MOOD_GENERATION)
        stats = self.backend.stats(window, generation)
        if not stats.get("totalEntries"):
            return f"No mood entries found {_scope(window)}."

        if generation == Generation.intensity:
            average = f"Average intensity: {stats['avgIntensity']}/10"
        else:
            avg = stats["avgScore"]
            average = f"Average score: {format_score(avg)} ({label_for(nearest_score(avg)).label})"

        top = stats["mostFrequentMood"]
        breakdown = "\n".join(
            f"  {m['emoji']} {m['label']}: {m['count']} times" for m in stats["moodFrequency"]
        )
        return (
            f"Mood stats ({window.describe()}):\n\n"
            f"Total entries: {stats['totalEntries']}\n"
            f"{average}\n"
            f"Most frequent mood: {top['emoji']} {top['label']} ({top['count']} times)\n\n"
            f"Breakdown:\n{breakdown}"
        )

    # --- delete_mood ---

    def delete_mood(self, args: dict) -> str:
        entry_id = _int_arg(args, "id")
        if entry_id is None:
            raise ToolArgumentError("id is required")
        self.backend.delete(entry_id)
        return f"Deleted mood entry #{entry_id}."

    # --- get_dashboard_link ---

    def get_dashboard_link(self, args: dict) -> str:
        base = self.config.DASHBOARD_URL.rstrip("/")
        return (
            "Here's your mood tracker dashboard:\n\n"
            f"📊 Insights & Chart: {base}/insights\n"
            f"📋 Mood History: {base}/history\n"
            f"🏠 Log a Mood: {base}"
        )

    # --- registry ---

    def definitions(self) -> list[tuple[str, dict, ToolHandler, str]]:
        """(name, input schema, handler, error verb) for every tool."""
        window_props = {
            "start_date": {
                "type": "string",
                "format": "date",
                "description": "Start of an explicit range (YYYY-MM-DD). Overrides days.",
            },
            "end_date": {
                "type": "string",
                "format": "date",
                "description": "End of an explicit range, inclusive (YYYY-MM-DD).",
            },
        }
        return [
            (
                "log_mood",
                {
                    "description": (
                        "Log a mood entry on a 5-point scale. Use this when the user describes "
                        "how they're feeling. Map their feeling to a score: +2 (Super Good), "
                        "+1 (Good), 0 (Neutral), -1 (Bad), -2 (Very Bad)."
                    ),
                    "type": "object",
                    "properties": {
                        "emoji": {
                            "type": "string",
                            "description": "Emoji for the mood: 😄 (+2), 🙂 (+1), 😐 (0), 😕 (-1), 😞 (-2)",
                        },
                        "label": {
                            "type": "string",
                            "description": "Label: Super Good, Good, Neutral, Bad, or Very Bad",
                        },
                        "score": {
                            "type": "integer",
                            "minimum": SCORE_MIN,
                            "maximum": SCORE_MAX,
                            "description": "Mood score from -2 (Very Bad) to +2 (Super Good)",
                        },
                        "notes": {
                            "type": "string",
                            "description": "Optional free-form notes about the mood",
                        },
                    },
                    "required": ["emoji", "label", "score"],
                },
                self.log_mood,
                "logging mood",
            ),
            (
                "get_mood_history",
                {
                    "description": (
                        "Get recent mood entries. Use this when the user asks about their "
                        "recent moods or mood history."
                    ),
                    "type": "object",
                    "properties": {
                        "days": {
                            "type": "integer",
                            "minimum": 1,
                            "maximum": MAX_DAYS,
                            "default": self.config.HISTORY_DEFAULT_DAYS,
                            "description": (
                                f"Number of days to look back (default {self.config.HISTORY_DEFAULT_DAYS})"
                            ),
                        },
                        **window_props,
                    },
                    "required": [],
                },
                self.get_mood_history,
                "fetching history",
            ),
            (
                "get_mood_stats",
                {
                    "description": (
                        "Get mood statistics and trends. Use this when the user asks about "
                        "patterns, averages, or their most common mood."
                    ),
                    "type": "object",
                    "properties": {
                        "days": {
                            "type": "integer",
                            "minimum": 1,
                            "maximum": MAX_DAYS,
                            "default": self.config.STATS_DEFAULT_DAYS,
                            "description": (
                                f"Number of days to analyze (default {self.config.STATS_DEFAULT_DAYS})"
                            ),
                        },
                        **window_props,
                    },
                    "required": [],
                },
                self.get_mood_stats,
                "fetching stats",
            ),
            (
                "delete_mood",
                {
                    "description": "Delete a mood entry by its ID.",
                    "type": "object",
                    "properties": {
                        "id": {"type": "integer", "description": "The ID of the mood entry to delete"},
                    },
                    "required": ["id"],
                },
                self.delete_mood,
                "deleting entry",
            ),
            (
                "get_dashboard_link",
                {
                    "description": (
                        "Get the link to the mood tracker dashboard. Use this when the user asks "
                        "to see their mood chart, report, insights, summary, or dashboard."
                    ),
                    "type": "object",
                    "properties": {},
                    "required": [],
                },
                self.get_dashboard_link,
                "building dashboard link",
            ),
        ]

    def call(self, name: str, arguments: Optional[dict[str, Any]]) -> str:
        """Run one tool. Always returns text, success or failure."""
        for tool_name, _schema, handler, verb in self.definitions():
            if tool_name == name:
                break
        else:
            return f"Error: unknown tool {name!r}"

        try:
            return handler(arguments or {})
        except (ToolArgumentError, MoodLogException) as exc:
            logger.warning("tool_failed", tool=name, error=str(exc))
            return f"Error {verb}: {exc}"
        except Exception as exc:
            logger.exception("tool_error", tool=name)
            return f"Error {verb}: {exc}"
