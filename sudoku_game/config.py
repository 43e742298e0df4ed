"""Game settings, optionally loaded from a JSON file."""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from .generator.generator import DEFAULT_MAX_ATTEMPTS
from .history.history import MAX_ENTRIES

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_PATH = os.path.join(os.path.expanduser("~"), ".sudoku_game", "history.json")


@dataclass(frozen=True)
class GameConfig:
    """Settings shared by the CLI and GameSession."""
    history_path: str = DEFAULT_HISTORY_PATH
    max_history: int = MAX_ENTRIES
    max_generation_attempts: int = DEFAULT_MAX_ATTEMPTS
    tick_seconds: float = 1.0

    @classmethod
    def load(cls, path: Optional[str]) -> GameConfig:
        """
        Read settings from a JSON object file.

        Unknown keys are ignored. A missing or unreadable file gives the
        defaults.
        """
        if not path or not os.path.exists(path):
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return cls().override(**data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not load config from %s, using defaults: %s", path, e)
            return cls()

    def override(self, **values: Any) -> GameConfig:
        """Copy with the given non-None values replaced."""
        known = {f.name for f in fields(self)}
        updates: Dict[str, Any] = {k: v for k, v in values.items() if k in known and v is not None}
        config = replace(self, **updates)
        config.validate()
        return config

    def validate(self) -> None:
        if self.max_history < 1:
            raise ValueError(f"max_history must be at least 1, got {self.max_history}")
        if self.max_generation_attempts < 1:
            raise ValueError(f"max_generation_attempts must be at least 1, got {self.max_generation_attempts}")
        if self.tick_seconds <= 0:
            raise ValueError(f"tick_seconds must be positive, got {self.tick_seconds}")
