"""Sudoku puzzle generator with configurable difficulty levels."""

from __future__ import annotations
import logging
import os
import random
from enum import Enum
from typing import Callable, List, Optional, Tuple

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..core.validator import is_valid_placement
from .fingerprint import hash_puzzle

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10


class Difficulty(Enum):
    """Difficulty levels for Sudoku puzzles."""
    TUTORIAL = "tutorial"
    FACIL = "facil"
    MEDIO = "medio"
    DIFICIL = "dificil"
    EXPERT = "expert"

    @property
    def cells_to_remove(self) -> int:
        """Number of cells (out of 81) blanked when carving the puzzle."""
        return _DIFFICULTY_TABLE[self][0]

    @property
    def hint_budget(self) -> int:
        """Number of hints the player may use in a game at this level."""
        return _DIFFICULTY_TABLE[self][1]

    @classmethod
    def parse(cls, value) -> Difficulty:
        """Accept a Difficulty or its string value (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r}, expected one of: {choices}") from None


_DIFFICULTY_TABLE = {
    Difficulty.TUTORIAL: (10, 7),
    Difficulty.FACIL: (30, 5),
    Difficulty.MEDIO: (40, 3),
    Difficulty.DIFICIL: (50, 1),
    Difficulty.EXPERT: (64, 0),
}


def fill_grid(board: SudokuBoard, rng: Optional[random.Random] = None) -> bool:
    """
    Complete the board in place using randomized backtracking.

    Cells are visited in row-major order. At the first empty cell the digits
    1-9 are tried in shuffled order; the first branch that completes the
    board wins.

    Returns:
        True if the board was completed. Always True from an empty board.
    """
    if rng is None:
        rng = random

    cell = board.find_empty()
    if cell is None:
        return True

    row, col = cell
    digits = list(range(1, board.size + 1))
    rng.shuffle(digits)

    for value in digits:
        if is_valid_placement(board, row, col, value):
            board.set(row, col, value)
            if fill_grid(board, rng):
                return True
            board.clear(row, col)

    return False


def remove_numbers(board: SudokuBoard, count: int, rng: Optional[random.Random] = None) -> None:
    """
    Blank exactly ``count`` filled cells, chosen uniformly at random.

    Does not check that the resulting puzzle has a unique solution.
    """
    if rng is None:
        rng = random

    filled = board.count_filled()
    if count < 0 or count > filled:
        raise ValueError(f"Cannot remove {count} cells from a board with {filled} filled cells")

    removed = 0
    while removed < count:
        row = rng.randrange(board.size)
        col = rng.randrange(board.size)
        if not board.is_empty(row, col):
            board.clear(row, col)
            removed += 1


class SudokuGenerator:
    """
    Generator for Sudoku puzzles with various difficulty levels.

    Algorithm:
    1. Generate a complete valid Sudoku solution using backtracking
    2. Remove a fixed number of cells based on difficulty level
    3. Optionally retry when the puzzle's fingerprint was already played
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
        """
        self.rng = random.Random(seed)

    def generate(self, difficulty: Difficulty = Difficulty.MEDIO) -> SudokuBoard:
        """
        Generate a Sudoku puzzle with the specified difficulty.

        Returns:
            A SudokuBoard with the puzzle (clues only, all of them fixed).
        """
        puzzle, _ = self.generate_with_solution(difficulty)
        return puzzle

    def generate_with_solution(self, difficulty: Difficulty = Difficulty.MEDIO) -> Tuple[SudokuBoard, SudokuBoard]:
        """
        Generate a puzzle along with its solution.

        Returns:
            Tuple of (puzzle, solution) SudokuBoards. The puzzle's givens are
            fixed, its blanks editable.
        """
        difficulty = Difficulty.parse(difficulty)
        solution = self._generate_complete_board()
        puzzle = solution.copy()
        remove_numbers(puzzle, difficulty.cells_to_remove, self.rng)
        puzzle.lock_filled()
        return puzzle, solution

    def generate_unique(
        self,
        difficulty: Difficulty = Difficulty.MEDIO,
        is_used: Optional[Callable[[str], bool]] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> Tuple[SudokuBoard, SudokuBoard]:
        """
        Generate a puzzle whose fingerprint has not been played before.

        Args:
            difficulty: Desired difficulty level.
            is_used: Predicate telling whether a fingerprint is already in
                     history. None means nothing has been played.
            max_attempts: Generation attempts before giving up on novelty.

        Returns:
            Tuple of (puzzle, solution). If every attempt collides, the last
            generated pair is returned anyway.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        for attempt in range(1, max_attempts + 1):
            puzzle, solution = self.generate_with_solution(difficulty)
            if is_used is None or not is_used(hash_puzzle(puzzle)):
                return puzzle, solution
            logger.debug("Puzzle collided with history (attempt %d/%d)", attempt, max_attempts)

        logger.info("All %d attempts collided with history, reusing last puzzle", max_attempts)
        return puzzle, solution

    def generate_batch(self, count: int, difficulty: Difficulty = Difficulty.MEDIO,
                       show_progress: bool = False) -> List[Tuple[SudokuBoard, SudokuBoard]]:
        """
        Generate multiple (puzzle, solution) pairs of the same difficulty.

        Fingerprints already produced within the batch are not repeated
        (up to the usual retry bound).
        """
        seen = set()
        pairs = []
        for _ in tqdm(range(count), desc=f"Generating {Difficulty.parse(difficulty).value}",
                      disable=not show_progress):
            puzzle, solution = self.generate_unique(difficulty, seen.__contains__)
            seen.add(hash_puzzle(puzzle))
            pairs.append((puzzle, solution))
        return pairs

    def _generate_complete_board(self) -> SudokuBoard:
        """Generate a complete valid Sudoku board using backtracking."""
        board = SudokuBoard()
        fill_grid(board, self.rng)
        return board

    @staticmethod
    def save_to_folder(pairs: List[Tuple[SudokuBoard, SudokuBoard]], folder_path: str,
                       prefix: str = "puzzle") -> List[str]:
        """
        Save (puzzle, solution) pairs to a folder as individual text files.

        Returns:
            Paths of the files written.
        """
        os.makedirs(folder_path, exist_ok=True)

        paths = []
        for i, (puzzle, solution) in enumerate(pairs, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(puzzle.to_string())
                f.write("\n")
                f.write(solution.to_string())
                f.write("\n\nPretty format:\n")
                f.write(str(puzzle))
            paths.append(file_path)
        return paths
