"""Sudoku puzzle generator and single-player game engine."""

from .core import SudokuBoard, Cell
from .generator import SudokuGenerator, Difficulty
from .history import History, HistoryEntry
from .session import GameSession, SessionState

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "Cell",
    "SudokuGenerator",
    "Difficulty",
    "History",
    "HistoryEntry",
    "GameSession",
    "SessionState",
]
