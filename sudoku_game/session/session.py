"""Live game session: board state, clock, hints and victory detection."""

from __future__ import annotations
import functools
import logging
import random
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Set, Tuple

import numpy as np

from ..core.board import Cell, SudokuBoard
from ..core.validator import find_conflicts
from ..generator import Difficulty, SudokuGenerator, hash_puzzle
from ..generator.generator import DEFAULT_MAX_ATTEMPTS
from ..history import History, HistoryEntry
from .timer import RepeatingTimer

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class SessionState(Enum):
    """Lifecycle of a single game."""
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    PAUSED = "paused"
    WON = "won"
    GAVE_UP = "gave_up"


class GameSession:
    """
    A single-player Sudoku game.

    The session owns the play board, the solution it was carved from, the
    hint budget and the clock. It exposes commands for a front-end (start,
    pause, resume, set_cell, use_hint, give_up, reset) and records won games
    into a History.

    Invalid commands (editing a fixed cell, a value outside 0-9, anything
    outside the right state) are ignored rather than raised, since a UI
    routinely sends them from disabled controls.

    The clock is a single RepeatingTimer owned by the session. Every exit
    from PLAYING cancels it and every entry into PLAYING cancels before
    creating a new one, so at most one timer ever runs.
    """

    def __init__(
        self,
        generator: Optional[SudokuGenerator] = None,
        history: Optional[History] = None,
        tick_seconds: float = 1.0,
        max_generation_attempts: int = DEFAULT_MAX_ATTEMPTS,
        timer_factory: Optional[Callable[[float, Callable[[], None]], RepeatingTimer]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a session in the NOT_STARTED state.

        Args:
            generator: Puzzle generator (a fresh unseeded one by default).
            history: History to dedup against and record wins into.
            tick_seconds: Real seconds between clock ticks.
            max_generation_attempts: Retries when a puzzle was already played.
            timer_factory: Builds the clock timer from (interval, callback).
            clock: Returns the timestamp stored with a won game.
            rng: Random source for choosing hint cells.
        """
        self.generator = generator if generator is not None else SudokuGenerator()
        self.history = history if history is not None else History()
        self.tick_seconds = tick_seconds
        self.max_generation_attempts = max_generation_attempts
        self._timer_factory = timer_factory or RepeatingTimer
        self._clock = clock
        self.rng = rng if rng is not None else random.Random()
        self._timer = None
        self._clock_generation = 0
        self.reset()

    def _clear(self) -> None:
        self.state = SessionState.NOT_STARTED
        self.difficulty: Optional[Difficulty] = None
        self.board: Optional[SudokuBoard] = None
        self.solution: Optional[SudokuBoard] = None
        self.puzzle_hash: Optional[str] = None
        self.hint_budget = 0
        self.hints_remaining = 0
        self.elapsed_seconds = 0

    # Clock

    def _tick(self, generation: int) -> None:
        # Ticks from a timer that has since been replaced or cancelled are dropped.
        if generation != self._clock_generation:
            return
        if self.state is SessionState.PLAYING and not self.history_open:
            self.elapsed_seconds += 1

    def _stop_clock(self) -> None:
        self._clock_generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _start_clock(self) -> None:
        self._stop_clock()
        self._timer = self._timer_factory(
            self.tick_seconds, functools.partial(self._tick, self._clock_generation))
        self._timer.start()

    @property
    def clock_running(self) -> bool:
        return self._timer is not None

    # Transitions

    def start(self, difficulty) -> None:
        """
        Start a new game at ``difficulty`` (a Difficulty or its value).

        Any game in progress is discarded first.
        """
        difficulty = Difficulty.parse(difficulty)
        self.reset()

        puzzle, solution = self.generator.generate_unique(
            difficulty,
            self.history.is_puzzle_used,
            max_attempts=self.max_generation_attempts,
        )
        self.difficulty = difficulty
        self.board = puzzle
        self.solution = solution
        self.puzzle_hash = hash_puzzle(puzzle)
        self.hint_budget = difficulty.hint_budget
        self.hints_remaining = difficulty.hint_budget
        self.elapsed_seconds = 0
        self.state = SessionState.PLAYING
        self._start_clock()
        logger.debug("Started %s game (%d blanks)", difficulty.value, puzzle.count_empty())

    def pause(self) -> None:
        if self.state is not SessionState.PLAYING:
            return
        self._stop_clock()
        self.state = SessionState.PAUSED

    def resume(self) -> None:
        if self.state is not SessionState.PAUSED:
            return
        self.state = SessionState.PLAYING
        if not self.history_open:
            self._start_clock()

    def open_history(self) -> None:
        """Stop the clock while the history view is shown, keeping the state as is."""
        self.history_open = True
        if self.state is SessionState.PLAYING:
            self._stop_clock()

    def close_history(self) -> None:
        """Restart the clock unless the game was explicitly paused or has ended."""
        self.history_open = False
        if self.state is SessionState.PLAYING:
            self._start_clock()

    def reset(self) -> None:
        """Discard the current game entirely and go back to NOT_STARTED."""
        self._stop_clock()
        self.history_open = False
        self._clear()

    # Board access

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """The cell at (row, col), or None before a game starts."""
        if self.board is None:
            return None
        return self.board.cell(row, col)

    def cells(self) -> List[List[Cell]]:
        """The 9x9 matrix of cells, or an empty list before a game starts."""
        if self.board is None:
            return []
        return self.board.cells()

    def conflicts(self) -> Set[Tuple[int, int]]:
        """Cells whose value clashes with another in the same row, column or box."""
        if self.board is None:
            return set()
        return find_conflicts(self.board)

    def set_cell(self, row: int, col: int, value) -> bool:
        """
        Write a player's value (0 clears the cell).

        Returns:
            True if the board changed. Edits to fixed cells, out-of-range
            values or coordinates, and edits outside PLAYING are ignored.
        """
        if self.state is not SessionState.PLAYING:
            return False
        if not all(_is_int(v) for v in (row, col, value)):
            return False
        if not 0 <= value <= self.board.size:
            return False
        if not (0 <= row < self.board.size and 0 <= col < self.board.size):
            return False
        if self.board.is_fixed(row, col):
            return False

        self.board.set(row, col, int(value))
        self.victory_check()
        return True

    def victory_check(self) -> bool:
        """
        Move to WON if every cell is filled and matches the solution.

        Incomplete or incorrect boards are left alone. On victory the clock
        stops and the game is recorded in history.

        Returns:
            True if this call won the game.
        """
        if self.state is not SessionState.PLAYING:
            return False
        if not self.board.is_complete():
            return False
        if not np.array_equal(self.board.grid, self.solution.grid):
            return False

        self._stop_clock()
        self.state = SessionState.WON
        date = self._clock() if self._clock is not None else None
        entry = HistoryEntry.create(
            difficulty=self.difficulty.value,
            time=self.elapsed_seconds,
            hints_used=self.hint_budget - self.hints_remaining,
            puzzle_hash=self.puzzle_hash,
            date=date,
        )
        self.history.record(entry)
        return True

    def use_hint(self) -> Optional[Tuple[int, int]]:
        """
        Reveal the solution value of one random empty, editable cell.

        The revealed cell becomes fixed. A hint that fills the last blank wins
        the game.

        Returns:
            The (row, col) revealed, or None if no hint was given.
        """
        if self.state is not SessionState.PLAYING or self.hints_remaining <= 0:
            return None

        candidates = [
            (row, col) for row, col in self.board.get_empty_cells()
            if not self.board.is_fixed(row, col)
        ]
        if not candidates:
            return None

        row, col = self.rng.choice(candidates)
        self.board.set(row, col, self.solution.get(row, col))
        self.board.lock(row, col)
        self.hints_remaining -= 1
        self.victory_check()
        return row, col

    def give_up(self) -> None:
        """Reveal the whole solution and end the game without recording it."""
        if self.state not in (SessionState.PLAYING, SessionState.PAUSED):
            return
        self._stop_clock()
        self.board = SudokuBoard(self.solution.grid)
        self.board.lock_filled()
        self.state = SessionState.GAVE_UP
        logger.debug("Gave up %s game after %ds", self.difficulty.value, self.elapsed_seconds)

    def __repr__(self) -> str:
        difficulty = self.difficulty.value if self.difficulty else None
        return (f"GameSession(state={self.state.value}, difficulty={difficulty}, "
                f"elapsed={self.elapsed_seconds}, hints={self.hints_remaining})")
