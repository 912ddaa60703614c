"""Deterministic, solvability-preserving shuffles.

The board is only ever scrambled by playing legal moves from the solved
state, so every shuffled position can be solved by playing them back.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from gapslide.engine.gamestate.grid import PuzzleGrid
from gapslide.engine.moves.enumerator import MoveOption, enumerate_valid_moves
from gapslide.engine.moves.executor import MoveEngine
from gapslide.engine.topology import Topology
from gapslide.models.piece import Piece

logger = logging.getLogger(__name__)

_MASK32 = 0xFFFFFFFF


class SeededRandom:
    """32-bit linear congruential generator (Numerical Recipes constants).

    Integer-only arithmetic, so a seed replays identically on every host.
    """

    def __init__(self, seed: int) -> None:
        self.seed = seed & _MASK32
        self.current = self.seed

    def next(self) -> float:
        self.current = (self.current * 1664525 + 1013904223) % 4294967296
        return self.current / 4294967296

    def next_int(self, n: int) -> int:
        return int(self.next() * n)


def string_hash(text: str) -> int:
    """``h = h * 31 + ord(c)`` folded to a signed 32-bit value."""
    h = 0
    for ch in text:
        h = ((h << 5) - h + ord(ch)) & _MASK32
    return h - (1 << 32) if h & 0x80000000 else h


def combine_seed(
    seed: int,
    steps: int,
    slug: str,
    reassign_gaps: bool,
    wrap_horizontal: bool,
    wrap_vertical: bool,
) -> int:
    """Fold every shuffle input into one 32-bit seed.

    Changing any single input yields an unrelated move sequence.
    """
    mixed = (
        seed
        ^ (steps << 16)
        ^ (string_hash(slug) << 24)
        ^ (int(reassign_gaps) << 12)
        ^ (int(wrap_horizontal) << 13)
        ^ (int(wrap_vertical) << 14)
    )
    return mixed & _MASK32


@dataclass(frozen=True)
class ShuffleWeights:
    """Tuning knobs for move selection.

    Urgency grows by ``1 / urgency_buildup`` per move without a large piece
    moving and saturates at ``urgency_max``.
    """

    urgency_buildup: int = 5
    urgency_max: float = 1.0
    distance_influence: float = 1.0
    distance_closer: float = 4.0
    distance_further: float = 0.25
    big_base: int = 5
    small_base: float = 1.0
    gap_swap_probability: float = 0.1
    urgency_big_bonus: int = 30
    adaptive_influence: float = 1.0


@dataclass(frozen=True)
class ShuffleResult:
    steps_taken: int
    score: int
    seed: int | None


# -- gap identity reassignment ------------------------------------------------


def _fisher_yates(items: list[Piece], rng: SeededRandom) -> list[Piece]:
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.next_int(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


def reassign_gaps(grid: PuzzleGrid, rng: SeededRandom) -> list[Piece]:
    """Pick new gaps at random, keeping the gap count of each size.

    Only ``is_gap`` flags change; positions and homes are untouched.
    Returns the new gaps and rebuilds the grid.
    """
    new_gaps: list[Piece] = []
    for large in (False, True):
        group = [p for p in grid.pieces if p.is_large == large]
        count = sum(1 for p in group if p.is_gap)
        chosen = _fisher_yates(group, rng)[:count]
        for p in group:
            p.is_gap = False
        for p in chosen:
            p.is_gap = True
        new_gaps.extend(chosen)
    grid.rebuild()
    return new_gaps


def shuffle_score(grid: PuzzleGrid, topology: Topology) -> int:
    """Sum of wrap-aware distances of large pieces from home; higher is more scrambled."""
    return sum(
        topology.distance(p.pos, p.home)
        for p in grid.pieces
        if p.is_large and not p.is_gap
    )


# -- shuffler -----------------------------------------------------------------


class Shuffler:
    """Scrambles a board by playing weighted random legal moves."""

    def __init__(self, engine: MoveEngine, weights: ShuffleWeights | None = None) -> None:
        self.engine = engine
        self.grid = engine.grid
        self.weights = weights or ShuffleWeights()

    def shuffle(
        self,
        steps: int,
        seed: int | None = None,
        reassign_gap_identities: bool = False,
        on_step: Callable[[int], None] | None = None,
    ) -> ShuffleResult:
        """Play *steps* moves.  The same inputs always give the same board."""
        config = self.grid.config
        if seed is None:
            seed = random.SystemRandom().randrange(1 << 32)
        rng = SeededRandom(
            combine_seed(
                seed,
                steps,
                config.slug,
                reassign_gap_identities,
                config.wrap_horizontal,
                config.wrap_vertical,
            )
        )

        if reassign_gap_identities:
            reassign_gaps(self.grid, rng)

        gaps = self.grid.gaps()
        last: MoveOption | None = None
        since_large = 0
        taken = 0

        with self.engine.quiet():
            for i in range(steps):
                options = enumerate_valid_moves(self.engine, gaps)
                if not options:
                    logger.warning("Shuffle stopped after %d of %d steps: no legal move", i, steps)
                    break
                options = self._exclude_reverse(options, last)

                urgency = self._urgency(since_large)
                weights = self._weigh(options, urgency, gaps, rng)
                choice = options[self._pick(weights, rng)]

                self.engine.attempt_move(choice.direction, choice.gap)
                last = choice
                since_large = 0 if choice.is_large else since_large + 1
                taken += 1
                if on_step is not None:
                    on_step(i)

        self.grid.rebuild()
        score = shuffle_score(self.grid, self.grid.topology)
        logger.info("Shuffle complete: %d steps, score %d", taken, score)
        return ShuffleResult(steps_taken=taken, score=score, seed=seed)

    @staticmethod
    def _exclude_reverse(options: list[MoveOption], last: MoveOption | None) -> list[MoveOption]:
        """Drop the move that would undo *last*, unless nothing else is left."""
        if last is None:
            return options
        reverse = last.direction.opposite
        forward = [o for o in options if not (o.gap is last.gap and o.direction is reverse)]
        return forward or options

    # -- weighting ------------------------------------------------------------

    def _urgency(self, since_large: int) -> float:
        w = self.weights
        return min(since_large / w.urgency_buildup, w.urgency_max) * w.adaptive_influence

    def _weigh(
        self,
        options: list[MoveOption],
        urgency: float,
        gaps: list[Piece],
        rng: SeededRandom,
    ) -> list[int]:
        w = self.weights
        only_swaps = all(o.is_gap_swap for o in options)
        weights: list[int] = []
        for option in options:
            if option.is_large:
                weights.append(w.big_base + int(urgency * w.urgency_big_bonus))
            elif option.is_gap_swap:
                if only_swaps or rng.next() < w.gap_swap_probability:
                    weights.append(1)
                else:
                    weights.append(0)
            else:
                weight = w.small_base
                if w.distance_influence > 0:
                    weight *= self._distance_factor(option, urgency, gaps)
                if w.adaptive_influence > 0:
                    weight *= 1 + urgency
                weights.append(max(1, round(weight)))
        if not any(weights):
            weights = [1] * len(options)
        return weights

    def _distance_factor(self, option: MoveOption, urgency: float, gaps: list[Piece]) -> float:
        """Favour moves that bring the moving gap closer to another gap."""
        other = next((g for g in gaps if g is not option.gap), None)
        new_pos = option.plan.destination(option.gap)
        if other is None or new_pos is None:
            return 1.0
        topo = self.grid.topology
        before = topo.distance(option.gap.pos, other.pos)
        after = topo.distance(new_pos, other.pos)
        w = self.weights
        if after < before:
            return 1.0 + (w.distance_closer - 1.0) * urgency * w.distance_influence
        if after > before:
            return 1.0 - (1.0 - w.distance_further) * urgency * w.distance_influence
        return 1.0

    @staticmethod
    def _pick(weights: list[int], rng: SeededRandom) -> int:
        roll = rng.next_int(sum(weights))
        for idx, weight in enumerate(weights):
            if roll < weight:
                return idx
            roll -= weight
        return len(weights) - 1
