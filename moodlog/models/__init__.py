from .mood_entry import MoodEntry

__all__ = [
    "MoodEntry",
]
