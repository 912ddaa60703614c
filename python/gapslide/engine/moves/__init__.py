from gapslide.engine.moves.chain import ChainPlan, detect_chain, is_straight_chain
from gapslide.engine.moves.enumerator import MoveOption, enumerate_valid_moves
from gapslide.engine.moves.executor import MoveEngine, MoveHooks, MoveKind, MovePlan

__all__ = [
    "ChainPlan",
    "MoveEngine",
    "MoveHooks",
    "MoveKind",
    "MoveOption",
    "MovePlan",
    "detect_chain",
    "enumerate_valid_moves",
    "is_straight_chain",
]
