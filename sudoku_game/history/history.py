"""Record of completed games, newest first."""

from __future__ import annotations
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from .store import HistoryStore, MemoryHistoryStore

logger = logging.getLogger(__name__)

MAX_ENTRIES = 50


@dataclass(frozen=True)
class HistoryEntry:
    """A single won game."""
    id: str
    difficulty: str
    time: int
    hints_used: int
    date: str
    puzzle_hash: str

    @classmethod
    def create(cls, difficulty: str, time: int, hints_used: int, puzzle_hash: str,
               date: Optional[datetime] = None) -> HistoryEntry:
        """Build an entry with a fresh id, timestamped now unless ``date`` is given."""
        if date is None:
            date = datetime.now(timezone.utc)
        return cls(
            id=uuid.uuid4().hex,
            difficulty=difficulty,
            time=int(time),
            hints_used=int(hints_used),
            date=date.isoformat(),
            puzzle_hash=puzzle_hash,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored record format."""
        return {
            "id": self.id,
            "difficulty": self.difficulty,
            "time": self.time,
            "hintsUsed": self.hints_used,
            "date": self.date,
            "puzzleHash": self.puzzle_hash,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> HistoryEntry:
        """
        Rebuild an entry from a stored record.

        Raises:
            KeyError, TypeError, ValueError, OverflowError: if the record is malformed.
        """
        return cls(
            id=str(data["id"]),
            difficulty=str(data["difficulty"]),
            time=int(data["time"]),
            hints_used=int(data["hintsUsed"]),
            date=str(data["date"]),
            puzzle_hash=str(data["puzzleHash"]),
        )


class History:
    """
    Append-only list of won games backed by a HistoryStore.

    Entries are kept newest first and capped at ``max_entries``; every change
    is written straight through to the store.
    """

    def __init__(self, store: Optional[HistoryStore] = None, max_entries: int = MAX_ENTRIES):
        self.store = store if store is not None else MemoryHistoryStore()
        self.max_entries = max_entries
        self._entries: List[HistoryEntry] = self._load()

    def _load(self) -> List[HistoryEntry]:
        entries = []
        for record in self.store.load():
            try:
                entries.append(HistoryEntry.from_dict(record))
            except (KeyError, TypeError, ValueError, OverflowError) as e:
                logger.warning("Skipping malformed history record %r: %s", record, e)
        return entries[:self.max_entries]

    @property
    def entries(self) -> List[HistoryEntry]:
        """Entries, newest first."""
        return list(self._entries)

    def record(self, entry: HistoryEntry) -> None:
        """Add a finished game at the front and persist the capped list."""
        self._entries.insert(0, entry)
        del self._entries[self.max_entries:]
        self.store.save([e.to_dict() for e in self._entries])
        logger.info("Recorded %s game in %ds (%d hints)", entry.difficulty, entry.time, entry.hints_used)

    def is_puzzle_used(self, puzzle_hash: str) -> bool:
        """True if any recorded game was played on this puzzle."""
        return any(e.puzzle_hash == puzzle_hash for e in self._entries)

    def clear(self) -> None:
        self._entries = []
        self.store.save([])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))
