"""Board configuration model for the gap puzzle."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

Coord = tuple[int, int]


class Direction(StrEnum):
    """Direction the pulled-in occupant travels; the gap travels the opposite way."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Coord:
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)


_DELTAS: dict[Direction, Coord] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class BoardConfigError(ValueError):
    """Raised for malformed board configurations and unknown board slugs."""


@dataclass(frozen=True)
class BoardConfig:
    """Immutable description of a puzzle layout.

    Large entries are top-left corners of 2×2 footprints.  Every cell that is
    neither inside a large footprint nor a small gap holds a small piece, so
    the board is fully tiled by construction.
    """

    slug: str
    width: int
    height: int
    large_pieces: tuple[Coord, ...] = ()
    small_gaps: tuple[Coord, ...] = ()
    large_gaps: tuple[Coord, ...] = ()
    wrap_horizontal: bool = False
    wrap_vertical: bool = False

    # -- construction helpers -------------------------------------------------

    def with_wrapping(self, horizontal: bool, vertical: bool) -> BoardConfig:
        return replace(self, wrap_horizontal=horizontal, wrap_vertical=vertical)

    # -- validation -----------------------------------------------------------

    def large_cover(self) -> dict[Coord, Coord]:
        """Map every cell inside a large footprint to its footprint's corner.

        Raises ``BoardConfigError`` if a footprint leaves the board or two
        footprints overlap.
        """
        cover: dict[Coord, Coord] = {}
        for x, y in (*self.large_pieces, *self.large_gaps):
            if not (0 <= x <= self.width - 2 and 0 <= y <= self.height - 2):
                raise BoardConfigError(
                    f"Large footprint at ({x}, {y}) does not fit a "
                    f"{self.width}×{self.height} board."
                )
            for dy in range(2):
                for dx in range(2):
                    cell = (x + dx, y + dy)
                    if cell in cover:
                        raise BoardConfigError(
                            f"Large footprints at {cover[cell]} and ({x}, {y}) "
                            f"overlap at {cell}."
                        )
                    cover[cell] = (x, y)
        return cover

    def validate(self) -> None:
        """Fail fast on a layout the move engine cannot run on."""
        if self.width < 2 or self.height < 2:
            raise BoardConfigError(
                f"Board must be at least 2×2, got {self.width}×{self.height}."
            )
        cover = self.large_cover()
        seen: set[Coord] = set()
        for x, y in self.small_gaps:
            if not (0 <= x < self.width and 0 <= y < self.height):
                raise BoardConfigError(f"Small gap ({x}, {y}) is off the board.")
            if (x, y) in cover:
                raise BoardConfigError(
                    f"Small gap ({x}, {y}) lies inside the large footprint "
                    f"at {cover[(x, y)]}."
                )
            if (x, y) in seen:
                raise BoardConfigError(f"Small gap ({x}, {y}) is listed twice.")
            seen.add((x, y))
        if len(self.small_gaps) + len(self.large_gaps) < 1:
            raise BoardConfigError(f"Board {self.slug!r} declares no gaps.")


# -- shipped layouts ----------------------------------------------------------

_CLASSIC_LARGE: tuple[Coord, ...] = (
    (0, 0), (3, 0), (5, 0),
    (0, 3), (3, 3), (6, 3),
    (0, 6), (5, 6),
)


def _shifted(coords: tuple[Coord, ...], dx: int, dy: int) -> tuple[Coord, ...]:
    return tuple((x + dx, y + dy) for x, y in coords)


_REGISTRY: dict[str, BoardConfig] = {
    "default": BoardConfig(
        slug="default",
        width=8,
        height=8,
        large_pieces=_CLASSIC_LARGE,
        small_gaps=((7, 6), (7, 7)),
    ),
    "horizontal": BoardConfig(
        slug="horizontal",
        width=16,
        height=8,
        large_pieces=_CLASSIC_LARGE + _shifted(_CLASSIC_LARGE, 8, 0),
        small_gaps=((15, 6), (15, 7)),
    ),
    "vertical": BoardConfig(
        slug="vertical",
        width=8,
        height=16,
        large_pieces=_CLASSIC_LARGE + _shifted(_CLASSIC_LARGE, 0, 8),
        small_gaps=((7, 14), (7, 15)),
    ),
    "largegap": BoardConfig(
        slug="largegap",
        width=8,
        height=8,
        large_pieces=_CLASSIC_LARGE[:-2] + ((5, 6),),
        large_gaps=((0, 6),),
    ),
    # Two stacked large gaps on the right edge; large pieces can chain
    # through them.
    "twinlarge": BoardConfig(
        slug="twinlarge",
        width=8,
        height=8,
        large_pieces=((0, 0), (3, 0), (0, 3), (3, 3), (0, 6), (3, 6)),
        large_gaps=((6, 4), (6, 6)),
    ),
}


def get_board(slug: str) -> BoardConfig:
    """Return the shipped layout called *slug*."""
    try:
        return _REGISTRY[slug]
    except KeyError:
        raise BoardConfigError(
            f"Unknown board {slug!r}; choose one of {', '.join(_REGISTRY)}."
        ) from None


def board_slugs() -> list[str]:
    return list(_REGISTRY)
