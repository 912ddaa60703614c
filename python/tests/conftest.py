from __future__ import annotations

import pytest

from gapslide.engine.gamestate import PuzzleGrid
from gapslide.engine.moves import MoveEngine
from gapslide.models.board import get_board
from helpers import build


@pytest.fixture
def default_board() -> tuple[PuzzleGrid, MoveEngine]:
    return build(get_board("default"))
