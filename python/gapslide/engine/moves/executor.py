"""Move validation and execution.

``direction`` always names where the pulled-in occupant travels; the gap
ends up on the other side.  E.g. ``Direction.RIGHT`` on a small gap at
(7, 6) pulls the tile at (6, 6) to the right and leaves the gap at (6, 6).

Each legal move is first described as a :class:`MovePlan` (who goes where)
and only then applied, so a dry run and a real move share every check.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import StrEnum

from gapslide.engine.gamestate.grid import PuzzleGrid
from gapslide.engine.moves.chain import detect_chain
from gapslide.engine.topology import Topology
from gapslide.models.board import Coord, Direction
from gapslide.models.piece import Piece

logger = logging.getLogger(__name__)


class MoveKind(StrEnum):
    GAP_SWAP = "gap_swap"
    LARGE_GAP_ADVANCE = "large_gap_advance"
    PAIR_ENTRY = "pair_entry"
    SMALL_SLIDE = "small_slide"
    LARGE_SWAP = "large_swap"
    LARGE_SLIDE = "large_slide"
    CHAIN = "chain"


_LARGE_PIECE_KINDS = {MoveKind.LARGE_SWAP, MoveKind.LARGE_SLIDE, MoveKind.CHAIN}


@dataclass
class MovePlan:
    """Every position change one move makes, in application order."""

    gap: Piece
    direction: Direction
    kind: MoveKind
    steps: list[tuple[Piece, int, int]] = field(default_factory=list)

    @property
    def is_large(self) -> bool:
        """A large (non-gap) piece moves."""
        return self.kind in _LARGE_PIECE_KINDS

    @property
    def is_gap_swap(self) -> bool:
        return self.kind is MoveKind.GAP_SWAP

    def destination(self, piece: Piece) -> Coord | None:
        for p, x, y in self.steps:
            if p is piece:
                return (x, y)
        return None

    def diff(self) -> dict[str, tuple[Coord, Coord]]:
        """``{id: (old, new)}``; only valid before the plan is applied."""
        return {p.id: ((p.x, p.y), (x, y)) for p, x, y in self.steps}


@dataclass
class MoveHooks:
    """Optional callbacks fired after a real (not dry-run) move."""

    on_render: Callable[[MovePlan], None] | None = None
    on_history: Callable[[MovePlan], None] | None = None
    on_win_check: Callable[[], bool] | None = None
    on_win: Callable[[], None] | None = None


class MoveEngine:
    """Validates and performs single moves on a :class:`PuzzleGrid`."""

    def __init__(self, grid: PuzzleGrid, hooks: MoveHooks | None = None) -> None:
        self.grid = grid
        self.hooks = hooks or MoveHooks()
        self._quiet = False

    @property
    def topology(self) -> Topology:
        return self.grid.topology

    @contextmanager
    def quiet(self) -> Iterator[None]:
        """Suspend the hooks, e.g. while shuffling."""
        previous = self._quiet
        self._quiet = True
        try:
            yield
        finally:
            self._quiet = previous

    # -- public API -----------------------------------------------------------

    def attempt_move(self, direction: Direction, gap: Piece, dry_run: bool = False) -> bool:
        """Move an occupant into *gap* along *direction*.

        Returns True if the move is legal.  With ``dry_run`` nothing changes.
        """
        plan = self.plan_move(direction, gap)
        if plan is None:
            return False
        if dry_run:
            return True
        self.apply(plan)
        self._notify(plan)
        return True

    def source_cell(self, direction: Direction, gap: Piece) -> Coord | None:
        """Cell whose occupant gets pulled into *gap*, or ``None`` if off the board."""
        x, y = gap.leading_edge(direction.opposite)[0]
        if not self.topology.is_valid_coord(x, y):
            return None
        return self.topology.normalize(x, y)

    def plan_move(self, direction: Direction, gap: Piece) -> MovePlan | None:
        """Describe the move without performing it; ``None`` if it is illegal."""
        if not gap.is_gap or self.grid.by_id.get(gap.id) is not gap:
            return None
        src = self.source_cell(direction, gap)
        if src is None:
            return None
        source = self.grid.occupant(*src)
        if source is None or source is gap:
            return None

        plan = None
        if source.is_gap and source.is_large == gap.is_large:
            plan = self._plan_gap_swap(direction, gap, source)
        elif gap.is_large:
            plan = self._plan_large_gap_advance(direction, gap)
            if plan is None and not source.is_gap and not source.is_large:
                plan = self._plan_pair_entry(direction, gap, source)
        elif not source.is_gap and not source.is_large:
            plan = self._plan_small_slide(direction, gap, source)
        if plan is None and not source.is_gap and source.is_large:
            plan = self._plan_large_piece(direction, gap, source)

        if plan is None or not self._is_closed(plan):
            return None
        return plan

    def apply(self, plan: MovePlan) -> None:
        """Write a validated plan to the registry and grid."""
        for piece, _, _ in plan.steps:
            self.grid.clear_footprint(piece)
        for piece, x, y in plan.steps:
            piece.x, piece.y = x, y
        for piece, _, _ in plan.steps:
            self.grid.write_footprint(piece)
        logger.debug(
            "%s %s via %s: %s",
            plan.kind.value,
            plan.direction.value,
            plan.gap.id,
            ", ".join(f"{p.id}->({x},{y})" for p, x, y in plan.steps),
        )

    # -- planners -------------------------------------------------------------

    def _plan_gap_swap(self, direction: Direction, gap: Piece, other: Piece) -> MovePlan:
        return MovePlan(
            gap,
            direction,
            MoveKind.GAP_SWAP,
            [(gap, other.x, other.y), (other, gap.x, gap.y)],
        )

    def _plan_large_gap_advance(self, direction: Direction, gap: Piece) -> MovePlan | None:
        # The two cells across the gap's leading edge hop over it.
        dx, dy = direction.delta
        topo = self.topology
        edge = gap.leading_edge(direction.opposite)
        occupants = self.grid.pieces_at(edge)
        first, second = occupants
        if first is None or second is None or first is second:
            return None
        if first.is_large or second.is_large:
            return None

        steps = [(gap, *topo.normalize(gap.x - dx, gap.y - dy))]
        for piece, (ex, ey) in zip(occupants, edge):
            tx, ty = topo.normalize(ex + 2 * dx, ey + 2 * dy)
            landing = self.grid.cell(tx, ty)
            if landing is None or landing.piece_id != gap.id:
                return None
            steps.append((piece, tx, ty))
        return MovePlan(gap, direction, MoveKind.LARGE_GAP_ADVANCE, steps)

    def _plan_pair_entry(self, direction: Direction, gap: Piece, source: Piece) -> MovePlan | None:
        # Source tile plus an aligned neighbour cross into the large gap.
        dx, dy = direction.delta
        topo = self.topology
        partner = None
        for px, py in _perpendicular_neighbours(source, direction):
            if not topo.is_valid_coord(px, py):
                continue
            cell = self.grid.cell(px, py)
            if cell is not None and not cell.is_gap and not cell.is_large:
                partner = self.grid.lookup(cell.piece_id)
                break
        if partner is None:
            return None

        gap_cells = self.grid.footprint_cells(gap)
        movers = [source, partner]
        landings = [topo.normalize(p.x + 2 * dx, p.y + 2 * dy) for p in movers]
        if any(c not in gap_cells for c in landings) or landings[0] == landings[1]:
            return None
        remaining = [c for c in gap_cells if c not in landings]
        new_home = topo.normalize(gap.x - dx, gap.y - dy)
        block = set(remaining) | {m.pos for m in movers}
        if block != set(self.grid.footprint_cells(gap, *new_home)):
            return None

        steps = [(gap, *new_home)]
        steps.extend((m, *c) for m, c in zip(movers, landings))
        return MovePlan(gap, direction, MoveKind.PAIR_ENTRY, steps)

    def _plan_small_slide(self, direction: Direction, gap: Piece, piece: Piece) -> MovePlan:
        return MovePlan(
            gap,
            direction,
            MoveKind.SMALL_SLIDE,
            [(piece, gap.x, gap.y), (gap, piece.x, piece.y)],
        )

    def _plan_large_piece(self, direction: Direction, gap: Piece, piece: Piece) -> MovePlan | None:
        topo = self.topology
        dx, dy = direction.delta
        lead = piece.leading_edge(direction)
        if not all(topo.is_valid_coord(x, y) for x, y in lead):
            return None
        ahead = self.grid.pieces_at(lead)
        if any(p is None or not p.is_gap for p in ahead):
            return None

        if all(p.is_large for p in ahead):
            if not gap.is_large:
                return None
            if ahead[0] is ahead[1]:
                large_gap = ahead[0]
                if large_gap is not gap:
                    return None
                if topo.normalize(piece.x + 2 * dx, piece.y + 2 * dy) != large_gap.pos:
                    return None
                return MovePlan(
                    gap,
                    direction,
                    MoveKind.LARGE_SWAP,
                    [(piece, large_gap.x, large_gap.y), (large_gap, piece.x, piece.y)],
                )
            # A 2x2 leading edge touches at most two gaps, so chains here are two long.
            chain = detect_chain(self.grid, piece, direction)
            if chain is None or not chain.involves(gap):
                return None
            return MovePlan(gap, direction, MoveKind.CHAIN, chain.steps())

        # Two small gaps ahead, the moving gap among them.
        if gap.is_large or any(p.is_large for p in ahead) or gap not in ahead:
            return None
        steps = [(piece, *topo.normalize(piece.x + dx, piece.y + dy))]
        for small_gap, (tx, ty) in zip(ahead, piece.trailing_edge(direction)):
            steps.append((small_gap, *topo.normalize(tx, ty)))
        return MovePlan(gap, direction, MoveKind.LARGE_SLIDE, steps)

    # -- helpers --------------------------------------------------------------

    def _is_closed(self, plan: MovePlan) -> bool:
        """The cells a plan vacates are exactly the cells it fills, without overlap."""
        vacated: list[Coord] = []
        filled: list[Coord] = []
        seen: set[str] = set()
        for piece, x, y in plan.steps:
            if piece.id in seen:
                return False
            seen.add(piece.id)
            vacated.extend(self.grid.footprint_cells(piece))
            filled.extend(self.grid.footprint_cells(piece, x, y))
        if len(set(filled)) != len(filled):
            return False
        return sorted(vacated) == sorted(filled)

    def _notify(self, plan: MovePlan) -> None:
        if self._quiet:
            return
        hooks = self.hooks
        if hooks.on_render is not None:
            hooks.on_render(plan)
        if hooks.on_history is not None:
            hooks.on_history(plan)
        if hooks.on_win_check is not None:
            won = hooks.on_win_check()
        else:
            won = self.grid.is_solved()
        if won and hooks.on_win is not None:
            hooks.on_win()


def _perpendicular_neighbours(piece: Piece, direction: Direction) -> list[Coord]:
    if direction.is_horizontal:
        return [(piece.x, piece.y - 1), (piece.x, piece.y + 1)]
    return [(piece.x - 1, piece.y), (piece.x + 1, piece.y)]
