"""Chain moves through stacked large gaps."""

from __future__ import annotations

import pytest

from gapslide.engine.moves import MoveKind, detect_chain, is_straight_chain
from gapslide.engine.topology import Topology
from gapslide.models.board import Direction
from gapslide.models.piece import Piece
from helpers import build, chain_board


def _gaps(*corners: tuple[int, int]) -> list[Piece]:
    return [Piece.at_home(f"BG{i}", True, True, x, y) for i, (x, y) in enumerate(corners)]


# -- execution ----------------------------------------------------------------


def test_chain_moves_piece_gaps_and_riders() -> None:
    grid, engine = build(chain_board())
    piece = grid.lookup("B0")
    gap_a, gap_b = grid.lookup("BG0"), grid.lookup("BG1")
    riders = {xy: grid.occupant(*xy) for xy in [(0, 0), (1, 0), (0, 3), (1, 3)]}

    plan = engine.plan_move(Direction.RIGHT, gap_b)
    assert plan is not None and plan.kind is MoveKind.CHAIN
    assert plan.is_large

    assert engine.attempt_move(Direction.RIGHT, gap_b)
    assert piece.pos == (2, 1)
    assert gap_a.pos == (0, 0)
    assert gap_b.pos == (0, 2)
    assert riders[(0, 0)].pos == (2, 0)
    assert riders[(1, 0)].pos == (3, 0)
    assert riders[(0, 3)].pos == (2, 3)
    assert riders[(1, 3)].pos == (3, 3)
    assert grid.check_integrity()


def test_chain_through_other_gap_is_rejected() -> None:
    grid, engine = build(chain_board())
    before = grid.snapshot()

    assert not engine.attempt_move(Direction.RIGHT, grid.lookup("BG0"))
    assert grid.snapshot() == before


def test_chain_reverses() -> None:
    grid, engine = build(chain_board())
    gap_b = grid.lookup("BG1")
    before = grid.snapshot()

    assert engine.attempt_move(Direction.RIGHT, gap_b)
    assert engine.attempt_move(Direction.LEFT, gap_b)
    assert grid.snapshot() == before
    assert grid.is_solved()


def test_chain_with_gap_in_rider_cell_is_rejected() -> None:
    grid, engine = build(chain_board(small_gaps=((0, 0),)))
    piece = grid.lookup("B0")
    before = grid.snapshot()

    assert detect_chain(grid, piece, Direction.RIGHT) is None
    assert not engine.attempt_move(Direction.RIGHT, grid.lookup("BG1"))
    assert grid.snapshot() == before


def test_detect_chain_is_pure() -> None:
    grid, _ = build(chain_board())
    before = grid.snapshot()

    chain = detect_chain(grid, grid.lookup("B0"), Direction.RIGHT)

    assert chain is not None
    assert chain.piece_to == (2, 1)
    assert [to for _, to in chain.gaps] == [(0, 0), (0, 2)]
    assert len(chain.carried) == 4
    assert grid.snapshot() == before


def test_detect_chain_ignores_gaps_and_small_pieces() -> None:
    grid, _ = build(chain_board())
    assert detect_chain(grid, grid.lookup("BG0"), Direction.LEFT) is None
    assert detect_chain(grid, grid.occupant(0, 0), Direction.RIGHT) is None


# -- alignment ----------------------------------------------------------------


@pytest.mark.parametrize(
    "topo, corners, direction, expected",
    [
        (Topology(8, 8), [(2, 0), (2, 2)], Direction.RIGHT, True),
        (Topology(8, 8), [(2, 0), (2, 2), (2, 4)], Direction.LEFT, True),
        (Topology(8, 8), [(0, 5), (2, 5), (4, 5)], Direction.DOWN, True),
        (Topology(8, 8), [(2, 0), (3, 2)], Direction.RIGHT, False),
        (Topology(8, 8), [(2, 0), (2, 3)], Direction.RIGHT, False),
        (Topology(8, 8), [(2, 0), (2, 2), (2, 6)], Direction.RIGHT, False),
        (Topology(8, 8), [(2, 0)], Direction.RIGHT, False),
        (Topology(8, 5), [(2, 0), (2, 3)], Direction.RIGHT, False),
        (Topology(8, 5, wrap_vertical=True), [(2, 0), (2, 3)], Direction.RIGHT, True),
        (Topology(8, 7, wrap_vertical=True), [(4, 5), (4, 0), (4, 2)], Direction.LEFT, True),
        (Topology(8, 7), [(4, 5), (4, 0), (4, 2)], Direction.LEFT, False),
    ],
    ids=[
        "pair",
        "three",
        "three-vertical-move",
        "misaligned-axis",
        "bad-spacing",
        "broken-line",
        "single",
        "no-wrap",
        "wrap-pair",
        "wrap-three",
        "no-wrap-three",
    ],
)
def test_is_straight_chain(
    topo: Topology,
    corners: list[tuple[int, int]],
    direction: Direction,
    expected: bool,
) -> None:
    assert is_straight_chain(topo, _gaps(*corners), direction) is expected
