"""Board layouts: validation and the shipped registry."""

from __future__ import annotations

import pytest

from gapslide.engine.gamestate import PuzzleGrid
from gapslide.models.board import BoardConfig, BoardConfigError, board_slugs, get_board


# -- validation ---------------------------------------------------------------


@pytest.mark.parametrize(
    "config, message",
    [
        (BoardConfig("tiny", 1, 4, small_gaps=((0, 0),)), "at least 2"),
        (BoardConfig("off", 4, 4, large_pieces=((3, 0),), small_gaps=((0, 0),)), "does not fit"),
        (
            BoardConfig("overlap", 4, 4, large_pieces=((0, 0), (1, 1)), small_gaps=((3, 3),)),
            "overlap",
        ),
        (
            BoardConfig("gap-in-large", 4, 4, large_pieces=((0, 0),), small_gaps=((1, 1),)),
            "inside the large",
        ),
        (BoardConfig("gap-off", 4, 4, small_gaps=((4, 0),)), "off the board"),
        (BoardConfig("dup", 4, 4, small_gaps=((0, 0), (0, 0))), "twice"),
        (BoardConfig("none", 4, 4), "no gaps"),
        (
            BoardConfig("large-overlap", 4, 4, large_pieces=((0, 0),), large_gaps=((1, 0),)),
            "overlap",
        ),
    ],
    ids=lambda v: v.slug if isinstance(v, BoardConfig) else None,
)
def test_invalid_layouts_are_rejected(config: BoardConfig, message: str) -> None:
    with pytest.raises(BoardConfigError, match=message):
        config.validate()


def test_invalid_layout_never_builds_a_grid() -> None:
    with pytest.raises(BoardConfigError):
        PuzzleGrid.from_config(BoardConfig("none", 4, 4))


def test_unknown_board() -> None:
    with pytest.raises(BoardConfigError, match="Unknown board"):
        get_board("nope")


def test_with_wrapping_returns_copy() -> None:
    base = get_board("default")
    wrapped = base.with_wrapping(True, False)
    assert wrapped.wrap_horizontal and not wrapped.wrap_vertical
    assert not base.wrap_horizontal
    assert wrapped.large_pieces == base.large_pieces


# -- shipped boards -----------------------------------------------------------


@pytest.mark.parametrize("slug", board_slugs())
def test_shipped_board_tiles_fully(slug: str) -> None:
    config = get_board(slug)
    grid = PuzzleGrid.from_config(config)

    assert grid.check_integrity()
    assert grid.is_solved()
    covered = sum(len(p.offsets) for p in grid.pieces)
    assert covered == config.width * config.height
    assert len(grid.gaps()) == len(config.small_gaps) + len(config.large_gaps)


def test_default_board_census() -> None:
    grid = PuzzleGrid.from_config(get_board("default"))
    large = [p for p in grid.pieces if p.is_large]
    small = [p for p in grid.pieces if not p.is_large and not p.is_gap]

    assert len(large) == 8
    assert len(small) == 64 - 8 * 4 - 2
    assert [g.id for g in grid.gaps()] == ["G0", "G1"]
    assert grid.lookup("G0").pos == (7, 6)
    assert grid.lookup("G1").pos == (7, 7)
