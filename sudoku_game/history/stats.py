"""Summary statistics over the game history."""

from __future__ import annotations
from typing import Any, Dict, Iterable

import numpy as np

from ..generator import Difficulty
from .history import HistoryEntry


def summarize(entries: Iterable[HistoryEntry]) -> Dict[str, Dict[str, Any]]:
    """
    Group entries by difficulty.

    Returns:
        Mapping of difficulty value to ``games``, ``best_time``,
        ``avg_time`` and ``avg_hints_used``. Difficulties are listed easiest
        first; ones with no games are left out.
    """
    entries = list(entries)
    known = [d.value for d in Difficulty]
    extra = sorted({e.difficulty for e in entries} - set(known))

    summary = {}
    for difficulty in known + extra:
        games = [e for e in entries if e.difficulty == difficulty]
        if not games:
            continue
        times = np.array([e.time for e in games])
        hints = np.array([e.hints_used for e in games])
        summary[difficulty] = {
            "games": len(games),
            "best_time": int(times.min()),
            "avg_time": float(times.mean()),
            "avg_hints_used": float(hints.mean()),
        }
    return summary


def format_elapsed(seconds: int) -> str:
    """Format elapsed seconds as MM:SS, or H:MM:SS past the hour."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"
