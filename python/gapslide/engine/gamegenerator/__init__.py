from gapslide.engine.gamegenerator.generator import (
    SeededRandom,
    ShuffleResult,
    Shuffler,
    ShuffleWeights,
    combine_seed,
    reassign_gaps,
    shuffle_score,
)

__all__ = [
    "SeededRandom",
    "ShuffleResult",
    "Shuffler",
    "ShuffleWeights",
    "combine_seed",
    "reassign_gaps",
    "shuffle_score",
]
