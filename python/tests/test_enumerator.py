"""Move enumeration agrees with the executor's own dry run."""

from __future__ import annotations

import pytest

from gapslide.engine.gamegenerator import Shuffler
from gapslide.engine.moves import MoveEngine, MoveKind, enumerate_valid_moves
from gapslide.models.board import Direction, board_slugs, get_board
from helpers import WRAP_IDS, WRAPS, build


def _dry_run_pairs(engine: MoveEngine) -> set[tuple[str, Direction]]:
    return {
        (gap.id, direction)
        for gap in engine.grid.gaps()
        for direction in Direction
        if engine.attempt_move(direction, gap, dry_run=True)
    }


@pytest.mark.parametrize("wrap", WRAPS, ids=WRAP_IDS)
@pytest.mark.parametrize("slug", board_slugs())
def test_enumeration_matches_dry_run(slug: str, wrap: tuple[bool, bool]) -> None:
    grid, engine = build(get_board(slug).with_wrapping(*wrap))
    shuffler = Shuffler(engine)

    for seed in range(5):
        shuffler.shuffle(20, seed=seed)
        options = enumerate_valid_moves(engine)
        assert {(o.gap.id, o.direction) for o in options} == _dry_run_pairs(engine)


def test_solved_default_board_options() -> None:
    grid, engine = build(get_board("default"))
    options = enumerate_valid_moves(engine)
    kinds = {(o.gap.id, o.direction): o.kind for o in options}

    assert kinds == {
        ("G0", Direction.UP): MoveKind.GAP_SWAP,
        ("G0", Direction.RIGHT): MoveKind.LARGE_SLIDE,
        ("G0", Direction.DOWN): MoveKind.SMALL_SLIDE,
        ("G1", Direction.DOWN): MoveKind.GAP_SWAP,
        ("G1", Direction.RIGHT): MoveKind.LARGE_SLIDE,
    }
    swaps = [o for o in options if o.is_gap_swap]
    assert len(swaps) == 2
    assert all(o.is_large for o in options if o.kind is MoveKind.LARGE_SLIDE)


def test_enumeration_limited_to_given_gaps() -> None:
    grid, engine = build(get_board("default"))
    options = enumerate_valid_moves(engine, [grid.lookup("G1")])
    assert {o.gap.id for o in options} == {"G1"}
