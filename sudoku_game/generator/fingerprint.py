"""Puzzle fingerprints used to avoid serving the same puzzle twice."""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.board import SudokuBoard


def hash_puzzle(puzzle: SudokuBoard) -> str:
    """
    Deterministic fingerprint of a puzzle's layout.

    Each row's digits (0 for blanks) are concatenated and the rows joined in
    order, giving an 81-character string. Two puzzles share a fingerprint only
    if every cell matches.
    """
    return ''.join(''.join(str(int(v)) for v in row) for row in puzzle.grid)
