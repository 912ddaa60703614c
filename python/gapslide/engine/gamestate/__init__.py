from gapslide.engine.gamestate.grid import GridIntegrityError, PuzzleGrid, Snapshot
from gapslide.engine.gamestate.state import GameState

__all__ = ["GameState", "GridIntegrityError", "PuzzleGrid", "Snapshot"]
