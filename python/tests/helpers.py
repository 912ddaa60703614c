"""Board builders shared by the engine tests."""

from __future__ import annotations

from gapslide.engine.gamestate import PuzzleGrid
from gapslide.engine.moves import MoveEngine
from gapslide.models.board import BoardConfig


def build(config: BoardConfig) -> tuple[PuzzleGrid, MoveEngine]:
    grid = PuzzleGrid.from_config(config)
    return grid, MoveEngine(grid)


def open_board(
    width: int = 8,
    height: int = 8,
    small_gaps: tuple[tuple[int, int], ...] = ((7, 6), (7, 7)),
    wrap_horizontal: bool = False,
    wrap_vertical: bool = False,
) -> BoardConfig:
    """Board of small pieces only."""
    return BoardConfig(
        slug="open",
        width=width,
        height=height,
        small_gaps=small_gaps,
        wrap_horizontal=wrap_horizontal,
        wrap_vertical=wrap_vertical,
    )


def chain_board(small_gaps: tuple[tuple[int, int], ...] = ()) -> BoardConfig:
    """6×6 with a large piece at (0, 1) facing two stacked large gaps."""
    return BoardConfig(
        slug="chain",
        width=6,
        height=6,
        large_pieces=((0, 1),),
        small_gaps=small_gaps,
        large_gaps=((2, 0), (2, 2)),
    )


WRAPS = [(False, False), (True, False), (False, True), (True, True)]
WRAP_IDS = ["flat", "wrap-h", "wrap-v", "torus"]
