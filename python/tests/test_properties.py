"""Invariants that hold after every legal move on every shipped board.

Each legal move in a shuffled position is played and checked against its
dry-run plan. It is then undone by the same gap moving the opposite way,
or, for a swap between two large gaps, by some other legal move.
"""

from __future__ import annotations

import pytest

from gapslide.engine.gamegenerator import Shuffler
from gapslide.engine.gamestate import PuzzleGrid
from gapslide.engine.gamestate.grid import Snapshot
from gapslide.engine.moves import MoveEngine, MoveKind, enumerate_valid_moves
from gapslide.models.board import board_slugs, get_board
from helpers import WRAP_IDS, WRAPS, build


def _gap_counts(grid: PuzzleGrid) -> tuple[int, int]:
    gaps = grid.gaps()
    return (
        sum(1 for g in gaps if not g.is_large),
        sum(1 for g in gaps if g.is_large),
    )


def _positions(snapshot: Snapshot) -> dict[str, tuple[int, int]]:
    return {pid: (x, y) for pid, (x, y, _) in snapshot.items()}


def _some_move_returns_to(engine: MoveEngine, target: Snapshot) -> bool:
    grid = engine.grid
    here = grid.snapshot()
    for option in enumerate_valid_moves(engine):
        engine.attempt_move(option.direction, option.gap)
        if grid.snapshot() == target:
            return True
        grid.restore(here)
    return False


@pytest.mark.parametrize("wrap", WRAPS, ids=WRAP_IDS)
@pytest.mark.parametrize("slug", board_slugs())
def test_every_move_keeps_board_sound_and_reverses(slug: str, wrap: tuple[bool, bool]) -> None:
    grid, engine = build(get_board(slug).with_wrapping(*wrap))
    identities = grid.identities()
    gap_counts = _gap_counts(grid)
    shuffler = Shuffler(engine)

    for seed in (1, 2, 3):
        shuffler.shuffle(30, seed=seed)
        before = grid.snapshot()

        for option in enumerate_valid_moves(engine):
            diff = option.plan.diff()
            assert engine.attempt_move(option.direction, option.gap)

            after = _positions(grid.snapshot())
            for pid, pos in _positions(before).items():
                assert after[pid] == (diff[pid][1] if pid in diff else pos)
            assert grid.check_integrity()
            assert grid.identities() == identities
            assert _gap_counts(grid) == gap_counts
            assert grid.snapshot() != before

            if option.kind is MoveKind.GAP_SWAP and option.gap.is_large:
                # Offset large gaps may only line up again through the other gap.
                assert _some_move_returns_to(engine, before)
            else:
                assert engine.attempt_move(option.direction.opposite, option.gap)
            assert grid.snapshot() == before


@pytest.mark.parametrize("slug", board_slugs())
def test_positions_stay_normalised(slug: str) -> None:
    grid, engine = build(get_board(slug).with_wrapping(True, True))
    Shuffler(engine).shuffle(100, seed=11)

    for piece in grid.pieces:
        assert 0 <= piece.x < grid.width
        assert 0 <= piece.y < grid.height
