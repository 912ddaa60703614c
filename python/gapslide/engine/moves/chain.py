"""Chain moves: one large piece travelling through a stack of large gaps.

When large gaps sit side by side, a large piece's leading edge can touch two
of them at once.  The piece then advances two cells, every gap in the stack
falls back two cells, and the small pieces caught behind the piece by the
gaps' new footprints hop two cells forward into the space the gaps left.

Detection is pure: :func:`detect_chain` returns a :class:`ChainPlan` and
never touches the grid.  The executor applies the plan in one go.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gapslide.engine.gamestate.grid import PuzzleGrid
from gapslide.engine.topology import Topology
from gapslide.models.board import Coord, Direction
from gapslide.models.piece import Piece

logger = logging.getLogger(__name__)


@dataclass
class ChainPlan:
    piece: Piece
    direction: Direction
    piece_to: Coord
    gaps: list[tuple[Piece, Coord]] = field(default_factory=list)
    carried: list[tuple[Piece, Coord]] = field(default_factory=list)

    def steps(self) -> list[tuple[Piece, int, int]]:
        """Ordered (piece, new_x, new_y) moves: the piece, its gaps, then riders."""
        out = [(self.piece, *self.piece_to)]
        out.extend((g, *to) for g, to in self.gaps)
        out.extend((p, *to) for p, to in self.carried)
        return out

    def involves(self, gap: Piece) -> bool:
        return any(g is gap for g, _ in self.gaps)


def edge_large_gaps(grid: PuzzleGrid, piece: Piece, direction: Direction) -> list[Piece] | None:
    """Distinct large gaps covering *piece*'s leading edge, in edge order.

    ``None`` when any edge cell is off the board or not a large gap.
    """
    found: list[Piece] = []
    for x, y in piece.leading_edge(direction):
        if not grid.topology.is_valid_coord(x, y):
            return None
        occupant = grid.occupant(x, y)
        if occupant is None or not (occupant.is_gap and occupant.is_large):
            return None
        if occupant not in found:
            found.append(occupant)
    return found


def is_straight_chain(topology: Topology, gaps: list[Piece], direction: Direction) -> bool:
    """True if *gaps* form an unbroken line across the move axis, two cells apart."""
    if len(gaps) < 2:
        return False
    if direction.is_horizontal:
        along = {g.x for g in gaps}
        across = sorted(g.y for g in gaps)
        size, wraps = topology.height, topology.wrap_vertical
    else:
        along = {g.y for g in gaps}
        across = sorted(g.x for g in gaps)
        size, wraps = topology.width, topology.wrap_horizontal
    if len(along) != 1:
        return False

    def wrap(v: int) -> int:
        return v % size if wraps else v

    for start in across:
        if sorted(wrap(start + 2 * k) for k in range(len(gaps))) == across:
            return True
    return False


def detect_chain(grid: PuzzleGrid, piece: Piece, direction: Direction) -> ChainPlan | None:
    """Build the chain plan for *piece* moving along *direction*, if there is one."""
    if piece.is_gap or not piece.is_large:
        return None
    gaps = edge_large_gaps(grid, piece, direction)
    if gaps is None or len(gaps) < 2:
        return None
    topo = grid.topology
    if not is_straight_chain(topo, gaps, direction):
        logger.debug("Chain rejected for %s: gaps %s not aligned", piece.id, [g.id for g in gaps])
        return None

    dx, dy = direction.delta
    piece_to = topo.normalize(piece.x + 2 * dx, piece.y + 2 * dy)
    piece_old = set(grid.footprint_cells(piece))
    piece_new = set(grid.footprint_cells(piece, *piece_to))

    plan = ChainPlan(piece=piece, direction=direction, piece_to=piece_to)
    freed: set[Coord] = set()
    displaced: list[Coord] = []
    for gap in gaps:
        gap_to = topo.normalize(gap.x - 2 * dx, gap.y - 2 * dy)
        plan.gaps.append((gap, gap_to))
        freed.update(c for c in grid.footprint_cells(gap) if c not in piece_new)
        displaced.extend(c for c in grid.footprint_cells(gap, *gap_to) if c not in piece_old)

    if len(displaced) != len(freed):
        return None
    targets: set[Coord] = set()
    for x, y in displaced:
        rider = grid.occupant(x, y)
        if rider is None or rider.is_gap or rider.is_large:
            logger.debug("Chain rejected for %s: (%d, %d) is not a small piece", piece.id, x, y)
            return None
        target = topo.normalize(x + 2 * dx, y + 2 * dy)
        if target not in freed or target in targets:
            return None
        targets.add(target)
        plan.carried.append((rider, target))
    return plan
