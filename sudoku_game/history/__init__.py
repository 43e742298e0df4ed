"""Game history: stored records of won games and their statistics."""

from .store import HistoryStore, JsonHistoryStore, MemoryHistoryStore
from .history import History, HistoryEntry, MAX_ENTRIES
from .stats import summarize, format_elapsed

__all__ = [
    "HistoryStore",
    "JsonHistoryStore",
    "MemoryHistoryStore",
    "History",
    "HistoryEntry",
    "MAX_ENTRIES",
    "summarize",
    "format_elapsed",
]
