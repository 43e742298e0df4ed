"""Generator module for creating Sudoku puzzles."""

from .generator import SudokuGenerator, Difficulty, fill_grid, remove_numbers
from .fingerprint import hash_puzzle

__all__ = ["SudokuGenerator", "Difficulty", "fill_grid", "remove_numbers", "hash_puzzle"]
