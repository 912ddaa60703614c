"""Core gameplay logic: wires moves to the counter, history and win check."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from gapslide.engine.gamegenerator import SeededRandom, ShuffleResult, Shuffler, reassign_gaps
from gapslide.engine.gamestate import GameState, PuzzleGrid
from gapslide.engine.moves import MoveEngine, MoveHooks, MovePlan
from gapslide.models.board import BoardConfig, Direction, get_board
from gapslide.models.piece import Piece

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    FREEPLAY = "freeplay"
    CHALLENGE = "challenge"


@dataclass(frozen=True)
class Challenge:
    seed: int
    steps: int
    reassign_gaps: bool = False

    def key(self, config: BoardConfig) -> str:
        """Identifier used to file results for this exact puzzle."""
        parts = [config.slug, str(self.seed), str(self.steps)]
        if self.reassign_gaps:
            parts.append("g")
        if config.wrap_horizontal:
            parts.append("h")
        if config.wrap_vertical:
            parts.append("v")
        return ":".join(parts)


class GamePlay:
    """Orchestrates a single game session on one board."""

    def __init__(
        self,
        config: BoardConfig,
        renderer: Callable[[MovePlan], None] | None = None,
    ) -> None:
        self.config = config
        self.grid = PuzzleGrid.from_config(config)
        self.engine = MoveEngine(
            self.grid,
            MoveHooks(
                on_render=renderer,
                on_history=self._record,
                on_win_check=self.grid.is_solved,
                on_win=self._handle_win,
            ),
        )
        self.shuffler = Shuffler(self.engine)
        self.state = GameState(self.grid)
        self.mode = Mode.FREEPLAY
        self.challenge: Challenge | None = None
        self.solved = False
        self.selected: Piece | None = None
        self._select_first_gap()

    @classmethod
    def from_board(
        cls,
        slug: str,
        wrap_horizontal: bool = False,
        wrap_vertical: bool = False,
    ) -> GamePlay:
        """Create a session on one of the shipped layouts."""
        return cls(get_board(slug).with_wrapping(wrap_horizontal, wrap_vertical))

    # -- movement (direction = where the *tile* moves) ------------------------

    def move(self, direction: Direction, gap: Piece | None = None) -> bool:
        """Pull a tile into *gap* (default: the selected gap) along *direction*.

        Returns True if the move was valid.
        """
        if self.mode is Mode.CHALLENGE and (self.solved or not self.state.is_running):
            return False
        target = gap if gap is not None else self.selected
        if target is None:
            return False
        return self.engine.attempt_move(direction, target)

    def can_move(self, direction: Direction, gap: Piece | None = None) -> bool:
        target = gap if gap is not None else self.selected
        return target is not None and self.engine.attempt_move(direction, target, dry_run=True)

    # -- gap selection --------------------------------------------------------

    @property
    def gaps(self) -> list[Piece]:
        return self.grid.gaps()

    def select_gap(self, gap: Piece) -> None:
        if not gap.is_gap:
            raise ValueError(f"{gap.id} is not a gap.")
        self.selected = gap

    def cycle_gap(self) -> Piece | None:
        gaps = self.gaps
        if not gaps:
            return None
        if self.selected in gaps:
            idx = (gaps.index(self.selected) + 1) % len(gaps)
        else:
            idx = 0
        self.selected = gaps[idx]
        return self.selected

    # -- shuffling / challenges -----------------------------------------------

    def shuffle(
        self,
        steps: int,
        seed: int | None = None,
        reassign_gaps: bool = False,
        on_step: Callable[[int], None] | None = None,
    ) -> ShuffleResult:
        """Scramble in free play.  History restarts from the shuffled position."""
        result = self.shuffler.shuffle(steps, seed, reassign_gaps, on_step)
        self.state.mark_baseline()
        self._select_first_gap()
        return result

    def start_challenge(self, seed: int, steps: int, reassign_gaps: bool = False) -> ShuffleResult:
        """Reset, shuffle deterministically, then start counting moves and time."""
        self.reset()
        result = self.shuffler.shuffle(steps, seed, reassign_gaps)
        self.mode = Mode.CHALLENGE
        self.challenge = Challenge(seed=seed, steps=steps, reassign_gaps=reassign_gaps)
        self.solved = False
        self.state.moves = 0
        self.state.mark_baseline()
        self.state.restart_clock()
        self._select_first_gap()
        logger.info("Challenge %s started", self.challenge.key(self.config))
        return result

    @property
    def challenge_key(self) -> str | None:
        return None if self.challenge is None else self.challenge.key(self.config)

    # -- history / resets -----------------------------------------------------

    def undo(self) -> bool:
        if self.mode is Mode.CHALLENGE and self.solved:
            return False
        if not self.state.undo():
            return False
        if self.selected is None or not self.selected.is_gap:
            self._select_first_gap()
        return True

    def reset(self) -> None:
        """Solved position with the layout's own gaps; back to free play."""
        for piece in self.grid.pieces:
            piece.x, piece.y = piece.home
        self._apply_config_gaps()
        self.mode = Mode.FREEPLAY
        self.challenge = None
        self.solved = False
        self.state.moves = 0
        self.state.restart_clock()

    def reset_gap_identities(self) -> None:
        """Make the layout's gap identities the gaps again, wherever they are."""
        self._apply_config_gaps()

    def randomize_gap_identities(self, seed: int | None = None) -> list[Piece]:
        if seed is None:
            seed = random.SystemRandom().randrange(1 << 32)
        new_gaps = reassign_gaps(self.grid, SeededRandom(seed))
        self.state.mark_baseline()
        self._select_first_gap()
        return new_gaps

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    # -- helpers --------------------------------------------------------------

    def _apply_config_gaps(self) -> None:
        small = set(self.config.small_gaps)
        large = set(self.config.large_gaps)
        for piece in self.grid.pieces:
            piece.is_gap = piece.home in (large if piece.is_large else small)
        self.grid.rebuild()
        self.state.mark_baseline()
        self._select_first_gap()

    def _select_first_gap(self) -> None:
        gaps = self.gaps
        self.selected = gaps[0] if gaps else None

    def _record(self, plan: MovePlan) -> None:
        self.state.increment_moves()
        self.state.record()

    def _handle_win(self) -> None:
        if self.mode is Mode.CHALLENGE and not self.solved:
            self.solved = True
            self.state.pause()
            logger.info(
                "Challenge %s solved in %d moves (%.1fs)",
                self.challenge_key,
                self.state.moves,
                self.state.elapsed_time,
            )
