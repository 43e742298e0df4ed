"""Persistence backends for the game history."""

from __future__ import annotations
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class HistoryStore(ABC):
    """Key-value style storage holding one serialized list of history records."""

    @abstractmethod
    def load(self) -> List[Dict[str, Any]]:
        """
        Return the stored records.

        Implementations return an empty list when nothing is stored or the
        stored data cannot be parsed; they never raise for bad data.
        """

    @abstractmethod
    def save(self, records: List[Dict[str, Any]]) -> None:
        """
        Overwrite the stored records with ``records``.

        Write failures are logged rather than raised; callers keep their
        in-memory copy.
        """


class MemoryHistoryStore(HistoryStore):
    """In-process store, mostly useful for tests and throwaway sessions."""

    def __init__(self, records=None):
        self._data = json.dumps(records) if records is not None else None

    def load(self) -> List[Dict[str, Any]]:
        if self._data is None:
            return []
        return _coerce_records(json.loads(self._data))

    def save(self, records: List[Dict[str, Any]]) -> None:
        self._data = json.dumps(records)


class JsonHistoryStore(HistoryStore):
    """Stores history as a JSON array in a single file."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> List[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read history from %s: %s", self.path, e)
            return []
        return _coerce_records(data)

    def save(self, records: List[Dict[str, Any]]) -> None:
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
        except OSError as e:
            logger.warning("Could not write history to %s: %s", self.path, e)

    def __repr__(self) -> str:
        return f"JsonHistoryStore({self.path!r})"


def _coerce_records(data: Any) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        logger.warning("Ignoring stored history: expected a list, got %s", type(data).__name__)
        return []
    return [item for item in data if isinstance(item, dict)]
