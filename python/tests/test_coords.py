"""Wrap-aware coordinate arithmetic."""

from __future__ import annotations

import pytest

from gapslide.engine.topology import Topology, axis_distance


FLAT = Topology(8, 6)
TORUS = Topology(8, 6, wrap_horizontal=True, wrap_vertical=True)


@pytest.mark.parametrize(
    "topo, raw, expected",
    [
        (FLAT, (-1, 3), (-1, 3)),
        (FLAT, (8, 6), (8, 6)),
        (TORUS, (-1, 3), (7, 3)),
        (TORUS, (8, 6), (0, 0)),
        (TORUS, (-9, -13), (7, 5)),
        (Topology(8, 6, wrap_horizontal=True), (-1, -1), (7, -1)),
    ],
    ids=["flat-left", "flat-corner", "torus-left", "torus-corner", "torus-far", "h-only"],
)
def test_normalize(topo: Topology, raw: tuple[int, int], expected: tuple[int, int]) -> None:
    assert topo.normalize(*raw) == expected


def test_is_valid_coord_respects_each_axis() -> None:
    h_only = Topology(8, 6, wrap_horizontal=True)
    assert FLAT.is_valid_coord(0, 0)
    assert FLAT.is_valid_coord(7, 5)
    assert not FLAT.is_valid_coord(8, 0)
    assert not FLAT.is_valid_coord(0, -1)
    assert h_only.is_valid_coord(-3, 2)
    assert not h_only.is_valid_coord(2, 6)
    assert TORUS.is_valid_coord(100, -100)


def test_axis_distance_takes_short_way_round() -> None:
    assert axis_distance(0, 7, 8, wraps=False) == 7
    assert axis_distance(0, 7, 8, wraps=True) == 1
    assert axis_distance(2, 6, 8, wraps=True) == 4


def test_distance_is_manhattan() -> None:
    assert FLAT.distance((0, 0), (7, 5)) == 12
    assert TORUS.distance((0, 0), (7, 5)) == 2
    assert TORUS.distance((3, 2), (3, 2)) == 0
