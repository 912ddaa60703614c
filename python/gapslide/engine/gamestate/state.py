"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time
from collections import deque

from gapslide.engine.gamestate.grid import PuzzleGrid, Snapshot

HISTORY_LIMIT = 500


class GameState:
    """Holds the grid, move counter, elapsed time and undo history."""

    def __init__(self, grid: PuzzleGrid, history_limit: int = HISTORY_LIMIT) -> None:
        self.grid = grid
        self.moves: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True
        self._history: deque[Snapshot] = deque(maxlen=history_limit + 1)
        self.mark_baseline()

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    @property
    def is_running(self) -> bool:
        return self._running

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    def restart_clock(self) -> None:
        self._elapsed_banked = 0.0
        self._start_time = time.time()
        self._running = True

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    # -- history --------------------------------------------------------------

    def mark_baseline(self) -> None:
        """Forget all history; the current position becomes the undo floor."""
        self._history.clear()
        self._history.append(self.grid.snapshot())

    def record(self) -> None:
        self._history.append(self.grid.snapshot())

    @property
    def can_undo(self) -> bool:
        return len(self._history) > 1

    def undo(self) -> bool:
        """Step back to the previous recorded position."""
        if not self.can_undo:
            return False
        self._history.pop()
        self.grid.restore(self._history[-1])
        return True

    @property
    def is_solved(self) -> bool:
        return self.grid.is_solved()
