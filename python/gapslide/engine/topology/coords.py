"""Wrap-aware coordinate arithmetic."""

from __future__ import annotations

from dataclasses import dataclass

from gapslide.models.board import BoardConfig, Coord


def axis_distance(a: int, b: int, size: int, wraps: bool) -> int:
    """Distance between *a* and *b* on one axis, the short way round if it wraps."""
    d = abs(a - b)
    if wraps:
        d = min(d, size - d)
    return d


@dataclass(frozen=True)
class Topology:
    """Board dimensions plus the two wrap flags.  Stateless."""

    width: int
    height: int
    wrap_horizontal: bool = False
    wrap_vertical: bool = False

    @classmethod
    def from_config(cls, config: BoardConfig) -> Topology:
        return cls(
            width=config.width,
            height=config.height,
            wrap_horizontal=config.wrap_horizontal,
            wrap_vertical=config.wrap_vertical,
        )

    def normalize(self, x: int, y: int) -> Coord:
        if self.wrap_horizontal:
            x = ((x % self.width) + self.width) % self.width
        if self.wrap_vertical:
            y = ((y % self.height) + self.height) % self.height
        return (x, y)

    def is_valid_coord(self, x: int, y: int) -> bool:
        if not self.wrap_horizontal and not 0 <= x < self.width:
            return False
        if not self.wrap_vertical and not 0 <= y < self.height:
            return False
        return True

    def distance(self, a: Coord, b: Coord) -> int:
        """Manhattan distance between two cells, honouring wrapping."""
        return axis_distance(a[0], b[0], self.width, self.wrap_horizontal) + axis_distance(
            a[1], b[1], self.height, self.wrap_vertical
        )
