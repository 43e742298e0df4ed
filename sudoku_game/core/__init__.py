"""Core module for Sudoku board representation and validation."""

from .board import SudokuBoard, Cell
from .validator import is_valid_placement, is_valid_board, is_complete_solution, find_conflicts

__all__ = [
    "SudokuBoard",
    "Cell",
    "is_valid_placement",
    "is_valid_board",
    "is_complete_solution",
    "find_conflicts",
]
