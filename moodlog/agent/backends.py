"""
Backends for the agent tools.

StoreBackend  talks to the database directly through MoodStore.
HttpBackend   calls the moodlog HTTP API with httpx.

Both return plain JSON-shaped dicts (the HTTP response bodies) and raise
MoodLogException subclasses on failure; the tool layer turns those into text.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

import httpx
import structlog
from sqlalchemy.orm import Session

from moodlog.core.config import Settings
from moodlog.core.errors import MoodValidationError, StoreError
from moodlog.services.stats import Generation, compute_stats
from moodlog.services.store import MoodStore, NewMoodEntry
from moodlog.services.window import DateRange, DayCount, Window

logger = structlog.get_logger()


class MoodBackend(Protocol):
    def log(self, emoji: str, label: str, score: int, notes: Optional[str]) -> dict: ...

    def history(self, window: Window) -> list[dict]: ...

    def stats(self, window: Window, generation: Generation) -> dict: ...

    def delete(self, entry_id: int) -> None: ...


def entry_to_dict(entry) -> dict:
    return {
        "id": entry.id,
        "emoji": entry.emoji,
        "label": entry.label,
        "score": entry.score,
        "intensity": entry.intensity,
        "notes": entry.notes,
        "created_at": entry.created_at.isoformat() if entry.created_at else "",
    }


# ---------------------------------------------------------------------------
# Direct store access
# ---------------------------------------------------------------------------

class StoreBackend:
    """One short-lived session per call."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def log(self, emoji: str, label: str, score: int, notes: Optional[str]) -> dict:
        with self.session_factory() as db:
            entry = MoodStore(db).create(
                NewMoodEntry(emoji=emoji, label=label, score=score, notes=notes)
            )
            return entry_to_dict(entry)

    def history(self, window: Window) -> list[dict]:
        with self.session_factory() as db:
            return [entry_to_dict(e) for e in MoodStore(db).list(window, ascending=False)]

    def stats(self, window: Window, generation: Generation) -> dict:
        with self.session_factory() as db:
            entries = MoodStore(db).list(window, ascending=True)
            return compute_stats(entries, generation).to_dict()

    def delete(self, entry_id: int) -> None:
        with self.session_factory() as db:
            MoodStore(db).delete_by_id(entry_id, missing_ok=True)


# ---------------------------------------------------------------------------
# HTTP API access
# ---------------------------------------------------------------------------

def window_params(window: Window) -> dict[str, Any]:
    if isinstance(window, DateRange):
        return {"startDate": window.start.isoformat(), "endDate": window.end.isoformat()}
    if isinstance(window, DayCount):
        return {"days": window.days}
    return {}


class HttpBackend:
    def __init__(self, client: httpx.Client):
        self.client = client

    @classmethod
    def from_settings(cls, config: Settings) -> "HttpBackend":
        return cls(httpx.Client(
            base_url=config.MOODLOG_API_URL,
            timeout=config.REQUEST_TIMEOUT_SECONDS,
        ))

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            resp = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("api_unreachable", method=method, url=url, error=str(exc))
            raise StoreError(f"moodlog API unreachable: {exc}", operation=method.lower()) from exc

        if resp.is_success:
            return resp.json()

        try:
            body = resp.json()
        except ValueError:
            body = None
        message = None
        if isinstance(body, dict):
            message = body.get("message") or body.get("error")
        message = message or resp.reason_phrase or f"HTTP {resp.status_code}"
        logger.warning("api_error", method=method, url=url, status=resp.status_code, error=message)
        if resp.status_code == 400:
            raise MoodValidationError(message)
        raise StoreError(message, operation=method.lower())

    def log(self, emoji: str, label: str, score: int, notes: Optional[str]) -> dict:
        return self._request(
            "POST", "/mood",
            json={"emoji": emoji, "label": label, "score": score, "notes": notes},
        )

    def history(self, window: Window) -> list[dict]:
        return self._request("GET", "/mood", params=window_params(window))

    def stats(self, window: Window, generation: Generation) -> dict:
        params = window_params(window)
        params["generation"] = generation.value
        return self._request("GET", "/mood/stats", params=params)

    def delete(self, entry_id: int) -> None:
        self._request("DELETE", f"/mood/{entry_id}")


def build_backend(config: Settings) -> MoodBackend:
    if config.TOOL_BACKEND == "http":
        return HttpBackend.from_settings(config)
    from moodlog.db.base import SessionLocal

    return StoreBackend(SessionLocal)
