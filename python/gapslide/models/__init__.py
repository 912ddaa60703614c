from gapslide.models.board import (
    BoardConfig,
    BoardConfigError,
    Direction,
    board_slugs,
    get_board,
)
from gapslide.models.highscore import HighScoreEntry, HighScoreManager
from gapslide.models.piece import Cell, Piece

__all__ = [
    "BoardConfig",
    "BoardConfigError",
    "Cell",
    "Direction",
    "HighScoreEntry",
    "HighScoreManager",
    "Piece",
    "board_slugs",
    "get_board",
]
