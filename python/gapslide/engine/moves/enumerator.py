"""Listing every legal move in the current position."""

from __future__ import annotations

from dataclasses import dataclass, field

from gapslide.engine.moves.executor import MoveEngine, MoveKind, MovePlan
from gapslide.models.board import Direction
from gapslide.models.piece import Piece


@dataclass(frozen=True)
class MoveOption:
    gap: Piece
    direction: Direction
    kind: MoveKind
    is_large: bool
    is_gap_swap: bool
    plan: MovePlan = field(compare=False, repr=False)


def enumerate_valid_moves(engine: MoveEngine, gaps: list[Piece] | None = None) -> list[MoveOption]:
    """Every (gap, direction) pair the engine accepts, in gap then Direction order.

    Legality comes from :meth:`MoveEngine.plan_move`, the same check
    ``attempt_move(..., dry_run=True)`` runs.
    """
    if gaps is None:
        gaps = engine.grid.gaps()
    options: list[MoveOption] = []
    for gap in gaps:
        for direction in Direction:
            plan = engine.plan_move(direction, gap)
            if plan is None:
                continue
            options.append(
                MoveOption(
                    gap=gap,
                    direction=direction,
                    kind=plan.kind,
                    is_large=plan.is_large,
                    is_gap_swap=plan.is_gap_swap,
                    plan=plan,
                )
            )
    return options
