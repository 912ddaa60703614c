"""Pieces, gaps and the per-cell occupancy tag."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple

from gapslide.models.board import Coord, Direction

LARGE_OFFSETS: tuple[Coord, ...] = ((0, 0), (1, 0), (0, 1), (1, 1))
SMALL_OFFSETS: tuple[Coord, ...] = ((0, 0),)


@dataclass(eq=False)
class Piece:
    """A tile or a gap.

    ``home_x``/``home_y`` are the entity's identity and never change during
    play; ``x``/``y`` hold the current (normalised) top-left cell.  Pieces are
    compared by identity so they can be used as dict keys while they move.
    """

    id: str
    is_gap: bool
    is_large: bool
    x: int
    y: int
    home_x: int
    home_y: int

    @classmethod
    def at_home(cls, id: str, is_gap: bool, is_large: bool, x: int, y: int) -> Piece:
        return cls(id=id, is_gap=is_gap, is_large=is_large, x=x, y=y, home_x=x, home_y=y)

    @property
    def pos(self) -> Coord:
        return (self.x, self.y)

    @property
    def home(self) -> Coord:
        return (self.home_x, self.home_y)

    @property
    def is_home(self) -> bool:
        return self.x == self.home_x and self.y == self.home_y

    @property
    def offsets(self) -> tuple[Coord, ...]:
        return LARGE_OFFSETS if self.is_large else SMALL_OFFSETS

    def footprint(self, x: int | None = None, y: int | None = None) -> Iterator[Coord]:
        """Yield the raw (not yet wrapped) cells covered from (*x*, *y*)."""
        ax = self.x if x is None else x
        ay = self.y if y is None else y
        for dx, dy in self.offsets:
            yield (ax + dx, ay + dy)

    def leading_edge(self, direction: Direction) -> list[Coord]:
        """Raw cells just beyond the footprint on the side *direction* points to."""
        return self._edge(direction, ahead=True)

    def trailing_edge(self, direction: Direction) -> list[Coord]:
        """Raw footprint cells left behind when moving one step along *direction*."""
        return self._edge(direction, ahead=False)

    def _edge(self, direction: Direction, ahead: bool) -> list[Coord]:
        dx, dy = direction.delta
        span = 2 if self.is_large else 1
        if dx:
            if ahead:
                ex = self.x + span if dx > 0 else self.x - 1
            else:
                ex = self.x if dx > 0 else self.x + span - 1
            return [(ex, self.y + i) for i in range(span)]
        if ahead:
            ey = self.y + span if dy > 0 else self.y - 1
        else:
            ey = self.y if dy > 0 else self.y + span - 1
        return [(self.x + i, ey) for i in range(span)]

    def tag(self, ox: int = 0, oy: int = 0) -> Cell:
        return Cell(self.id, self.is_gap, self.is_large, ox, oy)

    def __repr__(self) -> str:
        kind = ("large " if self.is_large else "") + ("gap" if self.is_gap else "piece")
        return f"<{kind} {self.id} at ({self.x}, {self.y}) home ({self.home_x}, {self.home_y})>"


class Cell(NamedTuple):
    """Occupancy of one grid cell.  ``ox``/``oy`` locate it inside a 2×2."""

    piece_id: str
    is_gap: bool
    is_large: bool
    ox: int = 0
    oy: int = 0
