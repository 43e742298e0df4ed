"""Validation utilities for Sudoku boards."""

from __future__ import annotations
from typing import Set, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_valid_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) is valid.

    The cell itself is expected not to hold ``value`` yet; callers test
    empty cells or clear the cell first.

    Args:
        board: The Sudoku board.
        row: Row index.
        col: Column index.
        value: Value to check (1 to 9).

    Returns:
        True if the value does not already appear in the row, the column or
        the 3x3 box containing (row, col).
    """
    if value < 1 or value > board.size:
        return False

    # Check row
    if value in board.get_row(row):
        return False

    # Check column
    if value in board.get_col(col):
        return False

    # Check box
    if value in board.get_box(row, col):
        return False

    return True


def _has_duplicates(values: np.ndarray) -> bool:
    non_zero = values[values != 0]
    return len(non_zero) != len(set(non_zero.tolist()))


def is_valid_board(board: SudokuBoard) -> bool:
    """
    Check if the entire board state is valid (no conflicts).

    Empty cells are ignored, so a partially filled board can be valid.
    """
    for i in range(board.size):
        if _has_duplicates(board.get_row(i)) or _has_duplicates(board.get_col(i)):
            return False

    for box_row in range(0, board.size, board.box_size):
        for box_col in range(0, board.size, board.box_size):
            if _has_duplicates(board.get_box(box_row, box_col)):
                return False

    return True


def is_complete_solution(board: SudokuBoard) -> bool:
    """Check that every row, column and box is a permutation of 1..9."""
    return board.is_complete() and is_valid_board(board)


def find_conflicts(board: SudokuBoard) -> Set[Tuple[int, int]]:
    """
    Positions whose value also appears elsewhere in their row, column or box.

    Used by front-ends to highlight mistakes; the board is not modified.
    """
    conflicts = set()
    for row, col in zip(*np.nonzero(board.grid)):
        row, col = int(row), int(col)
        value = board.get(row, col)
        # Each unit contains the cell itself once.
        if (np.count_nonzero(board.get_row(row) == value) > 1
                or np.count_nonzero(board.get_col(col) == value) > 1
                or np.count_nonzero(board.get_box(row, col) == value) > 1):
            conflicts.add((row, col))
    return conflicts
