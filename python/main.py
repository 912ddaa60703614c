#!/usr/bin/env python3
"""Gap Slide: a sliding puzzle with 1×1 and 2×2 tiles and several gaps.

Usage::

    python main.py                          # interactive menu
    python main.py -b twinlarge --wrap-h    # start on a board, wrapping left/right
    python main.py --seed 42 -n 300         # jump straight into a challenge
    python main.py --scores                 # view challenge results
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


# -- helpers ------------------------------------------------------------------


def _print_highscores() -> None:
    from gapslide.models.highscore import HighScoreManager

    manager = HighScoreManager(DATA_DIR / "highscores.json")
    keys = manager.get_all_keys()

    print("\n  === CHALLENGE RESULTS ===")
    if not keys:
        print("  No results yet.\n")
        return
    for key in keys:
        entries = manager.get_scores(key)
        if not entries:
            continue
        print(f"\n  --- {key} ---")
        for i, e in enumerate(entries, 1):
            print(f"  {i:>2}. {e.moves:>4} moves  {e.time:>7.1f}s  ({e.date})")
    print()


def _print_boards() -> None:
    from gapslide.models.board import board_slugs, get_board

    print()
    for slug in board_slugs():
        cfg = get_board(slug)
        gaps = len(cfg.small_gaps) + len(cfg.large_gaps)
        print(
            f"  {slug:<12} {cfg.width}x{cfg.height}  "
            f"{len(cfg.large_pieces)} large, {gaps} gaps"
        )
    print()


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    board: str = typer.Option(
        "default", "-b", "--board",
        help="Board layout to play.",
    ),
    wrap_h: bool = typer.Option(
        False, "--wrap-h",
        help="Wrap around the left and right edges.",
    ),
    wrap_v: bool = typer.Option(
        False, "--wrap-v",
        help="Wrap around the top and bottom edges.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Start a challenge with this shuffle seed.",
    ),
    steps: int = typer.Option(
        200, "-n", "--steps",
        min=1,
        help="Number of shuffle moves.",
    ),
    randomize_gaps: bool = typer.Option(
        False, "--randomize-gaps",
        help="Pick new gap identities before shuffling.",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show challenge results and exit.",
    ),
    list_boards: bool = typer.Option(
        False, "--list-boards",
        help="List the available boards and exit.",
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    ),
) -> None:
    """Gap Slide puzzle."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from gapslide.models.board import BoardConfigError, get_board

    if scores:
        _print_highscores()
        return
    if list_boards:
        _print_boards()
        return

    try:
        get_board(board)
    except BoardConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--board") from exc

    from frontend.cli.rich.app import run

    run(
        data_dir=DATA_DIR,
        board=board,
        wrap_horizontal=wrap_h,
        wrap_vertical=wrap_v,
        seed=seed,
        steps=steps,
        reassign_gaps=randomize_gaps,
    )


if __name__ == "__main__":
    app()
