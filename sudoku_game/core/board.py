"""Sudoku board representation: a fixed 9x9 grid with a fixed-cell mask."""

from __future__ import annotations
import numpy as np
from typing import List, NamedTuple, Optional, Tuple

SIZE = 9
BOX_SIZE = 3


class Cell(NamedTuple):
    """A single position as seen by a front-end: its value and whether it is locked."""
    value: int
    is_fixed: bool


class SudokuBoard:
    """
    Represents a standard 9x9 Sudoku board.

    Alongside the values (0 means empty) the board tracks which cells are
    fixed: givens placed at generation time and cells later revealed by a
    hint or by giving up. Fixed cells cannot be edited by the player.
    """

    size = SIZE
    box_size = BOX_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None,
                 fixed: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 grid. If None, creates an empty board.
            fixed: Optional 9x9 boolean mask of locked cells. Defaults to
                   all-unlocked.
        """
        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (SIZE, SIZE):
                raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {grid.shape}")
            if grid.min() < 0 or grid.max() > SIZE:
                raise ValueError(f"Grid values must be 0-{SIZE}")
            self.grid = grid.copy().astype(np.int32)
        else:
            self.grid = np.zeros((SIZE, SIZE), dtype=np.int32)

        if fixed is not None:
            fixed = np.asarray(fixed, dtype=bool)
            if fixed.shape != (SIZE, SIZE):
                raise ValueError(f"Fixed mask shape must be ({SIZE}, {SIZE})")
            self.fixed = fixed.copy()
        else:
            self.fixed = np.zeros((SIZE, SIZE), dtype=bool)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        return SudokuBoard(self.grid, self.fixed)

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use 0 to clear."""
        if value < 0 or value > SIZE:
            raise ValueError(f"Value must be 0-{SIZE}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col)."""
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return bool(self.grid[row, col] == 0)

    def is_fixed(self, row: int, col: int) -> bool:
        return bool(self.fixed[row, col])

    def lock(self, row: int, col: int) -> None:
        """Mark a cell as fixed so the player can no longer change it."""
        self.fixed[row, col] = True

    def lock_filled(self) -> None:
        """Fix every non-empty cell and unlock every empty one."""
        self.fixed = self.grid != 0

    def cell(self, row: int, col: int) -> Cell:
        return Cell(self.get(row, col), self.is_fixed(row, col))

    def cells(self) -> List[List[Cell]]:
        """The full 9x9 matrix of cells, row by row."""
        return [[self.cell(i, j) for j in range(SIZE)] for i in range(SIZE)]

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = row - row % BOX_SIZE
        box_col = col - col % BOX_SIZE
        return self.grid[box_row:box_row + BOX_SIZE,
                        box_col:box_col + BOX_SIZE].flatten()

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions, in row-major order."""
        rows, cols = np.nonzero(self.grid == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def find_empty(self) -> Optional[Tuple[int, int]]:
        """First empty cell in row-major order, or None when the board is full."""
        for i in range(SIZE):
            for j in range(SIZE):
                if self.grid[i, j] == 0:
                    return i, j
        return None

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_empty() == 0

    def to_string(self) -> str:
        """Row-major string of the 81 digits, 0 for empty cells."""
        return ''.join(str(int(v)) for v in self.grid.flatten())

    @classmethod
    def from_string(cls, s: str) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: String of 81 characters, 0 or . for empty, 1-9 for values.
               Non-empty cells come back fixed.
        """
        if len(s) != SIZE * SIZE:
            raise ValueError(f"String length must be {SIZE * SIZE}, got {len(s)}")

        values = []
        for c in s:
            if c in '0.':
                values.append(0)
            elif c.isdigit():
                values.append(int(c))
            else:
                raise ValueError(f"Invalid character in puzzle string: {c!r}")

        board = cls(np.array(values, dtype=np.int32).reshape(SIZE, SIZE))
        board.lock_filled()
        return board

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX_SIZE * 2 + 1)) + '+') * BOX_SIZE

        for i in range(SIZE):
            if i % BOX_SIZE == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(SIZE):
                val = self.grid[i, j]
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % BOX_SIZE == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(filled={self.count_filled()}, fixed={int(self.fixed.sum())})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
