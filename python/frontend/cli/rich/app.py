"""Rich terminal frontend with a coloured board and gap selection.

Uses the ``rich`` library for styled output and the shared input handler.
Includes a built-in menu for board selection, wrapping toggles, free
play, seeded challenges, and challenge results.
"""

from __future__ import annotations

import random
import sys
from datetime import datetime
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress import Progress
from rich.table import Table
from rich.text import Text

from frontend.cli.input_handler import get_key, get_key_timeout
from gapslide.engine.gameplay import GamePlay
from gapslide.engine.gamestate import PuzzleGrid
from gapslide.models.board import Direction, board_slugs
from gapslide.models.highscore import HighScoreEntry, HighScoreManager
from gapslide.models.piece import Piece

console = Console()

DEFAULT_STEPS = 200

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _label(piece: Piece) -> str:
    """Stable label from identity: letters for 2×2 pieces, numbers for 1×1."""
    index = int(piece.id.lstrip("BGS"))
    if piece.is_large:
        return chr(ord("A") + index % 26)
    return str(index + 1)


def _title(game: GamePlay) -> str:
    cfg = game.config
    flags = "".join(
        flag for flag, on in (("↔", cfg.wrap_horizontal), ("↕", cfg.wrap_vertical)) if on
    )
    return f"{cfg.slug}  {cfg.width}×{cfg.height}{'  ' + flags if flags else ''}"


# -- board rendering ----------------------------------------------------------


def _render_board(grid: PuzzleGrid, selected: Piece | None = None) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    small_count = sum(1 for p in grid.pieces if not p.is_large)
    width = max(2, len(str(small_count)))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(grid.width):
        table.add_column(width=width, justify="center")

    for y in range(grid.height):
        cells: list[str] = []
        for x in range(grid.width):
            cell = grid.cells[y][x]
            if cell is None:
                cells.append(" " * width)
                continue
            piece = grid.by_id[cell.piece_id]
            if piece.is_gap:
                glyph = "░" * width if piece.is_large else "·"
                if piece is selected:
                    cells.append(f"[bold black on yellow]{glyph:^{width}}[/bold black on yellow]")
                else:
                    cells.append(f"[dim]{glyph:^{width}}[/dim]")
                continue
            label = _label(piece)
            if piece.is_large:
                style = "bold green on #1e3a2a" if piece.is_home else "bold magenta on #313244"
            else:
                style = "bold green" if piece.is_home else "bold white"
            cells.append(f"[{style}]{label:>{width}}[/{style}]")
        table.add_row(*cells)

    return table


# -- menu screen --------------------------------------------------------------


def _draw_menu(slug: str, wrap_h: bool, wrap_v: bool) -> None:
    """Draw the main menu."""
    console.clear()

    boards = Text()
    for i, name in enumerate(board_slugs()):
        if i:
            boards.append("  ")
        if name == slug:
            boards.append(f" {name} ", style="bold green on #313244")
        else:
            boards.append(f" {name} ", style="dim")

    nav = Text("  ← →  change board", style="dim")

    wraps = Text()
    wraps.append("  4", style="bold cyan")
    wraps.append(f"  wrap ↔ {'on ' if wrap_h else 'off'}    ")
    wraps.append("5", style="bold cyan")
    wraps.append(f"  wrap ↕ {'on ' if wrap_v else 'off'}")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Free play    ")
    opts.append("2", style="bold yellow")
    opts.append("  Challenge    ")
    opts.append("3", style="dim bold")
    opts.append("  Results    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(boards),
        Align.center(nav),
        Text(""),
        Align.center(wraps),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]G A P   S L I D E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screens -------------------------------------------------------------


def _controls(challenge: bool) -> Text:
    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("Tab", style="bold cyan")
    controls.append("  gap   ", style="dim")
    controls.append("U", style="bold cyan")
    controls.append("  undo   ", style="dim")
    if not challenge:
        controls.append("X", style="bold yellow")
        controls.append("  shuffle   ", style="dim")
        controls.append("I", style="bold yellow")
        controls.append("/", style="dim")
        controls.append("O", style="bold yellow")
        controls.append("  gaps   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")
    return controls


def _draw_game(game: GamePlay, status: str = "") -> None:
    """Draw the play screen; stats are shown for challenges only."""
    console.clear()

    challenge = game.challenge is not None
    board_table = _render_board(game.grid, game.selected)

    title = _title(game)
    if challenge:
        title = f"[bold cyan]Challenge  {title}[/bold cyan]"
    else:
        title = f"[bold yellow]Free play  {title}[/bold yellow]"

    panel = Panel(
        Align.center(board_table),
        title=title,
        border_style="bright_blue" if challenge else "yellow",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    if challenge:
        stats = Text()
        stats.append("  Moves: ", style="dim")
        stats.append(str(game.state.moves), style="bold yellow")
        stats.append("    Time: ", style="dim")
        stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
        # Save cursor position right before the stats line so _update_time()
        # can later restore to this exact spot and overwrite only this line.
        sys.stdout.write("\033[s")
        sys.stdout.flush()
        console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls(challenge)))


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats line using the saved cursor position.

    Uses raw ANSI codes (bypassing Rich) so only the single stats
    line is repainted, so the board does not flicker.
    """
    _DIM = "\033[2m"
    _YB = "\033[33;1m"
    _RS = "\033[0m"

    m, s = divmod(int(game.state.elapsed_time), 60)
    stats_raw = (
        f"{_DIM}Moves: {_RS}{_YB}{game.state.moves}{_RS}"
        f"    {_DIM}Time: {_RS}{_YB}{m:02d}:{s:02d}{_RS}"
    )

    # Centre the visible text to match what Rich would produce.
    visible_len = len(f"Moves: {game.state.moves}    Time: {m:02d}:{s:02d}")
    pad = max(0, (console.width - visible_len) // 2)

    sys.stdout.write(f"\033[u\033[K{' ' * pad}{stats_raw}")
    sys.stdout.flush()


def _draw_win(game: GamePlay, rank: int | None) -> None:
    console.clear()

    board_table = _render_board(game.grid)

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  You solved it!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    if rank is not None:
        stats.append(f"    #{rank + 1}", style="bold green")

    key = Text(f"  {game.challenge_key}", style="dim")

    group = Group(
        Align.center(board_table),
        Align.center(congrats),
        Align.center(stats),
        Align.center(key),
    )

    panel = Panel(
        group,
        title=f"[bold green]Challenge  {_title(game)}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_highscores(manager: HighScoreManager) -> None:
    """Full-screen challenge results view (used from the menu)."""
    console.clear()

    keys = manager.get_all_keys()
    parts: list[Align] = []

    if not keys:
        parts.append(
            Align.center(Text("  No challenge results yet.", style="dim"))
        )
    else:
        for key in keys:
            hs_table = Table(
                title=key,
                title_style="bold cyan",
                box=rich.box.ROUNDED,
                border_style="dim",
                show_lines=False,
            )
            hs_table.add_column("#", justify="right", style="dim", width=3)
            hs_table.add_column("Moves", justify="right", style="yellow")
            hs_table.add_column("Time", justify="right", style="yellow")
            hs_table.add_column("Date", style="dim")

            for i, e in enumerate(manager.get_scores(key), 1):
                hs_table.add_row(
                    str(i),
                    str(e.moves),
                    f"{e.time:.1f}s",
                    e.date,
                )
            parts.append(Align.center(hs_table))

    panel = Panel(
        Group(*parts),
        title="[bold]CHALLENGE  RESULTS[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- shared actions -----------------------------------------------------------


def _shuffle(game: GamePlay, steps: int, reassign_gaps: bool = False) -> str:
    with Progress(transient=True, console=console) as progress:
        task = progress.add_task("Shuffling", total=steps)
        result = game.shuffle(
            steps,
            reassign_gaps=reassign_gaps,
            on_step=lambda _: progress.advance(task),
        )
    return f"[yellow]Shuffled {result.steps_taken} moves (score {result.score})[/yellow]"


def _handle_common(game: GamePlay, key: str) -> str | None:
    """Keys shared by free play and challenges.  Returns a status or None."""
    if key in _DIRECTIONS:
        if not game.move(_DIRECTIONS[key]):
            return "[dim]Blocked.[/dim]"
        return ""
    if key == "cycle":
        gap = game.cycle_gap()
        return "" if gap is None else f"[cyan]Gap {_label(gap)} selected[/cyan]"
    if key == "undo":
        return "" if game.undo() else "[dim]Nothing to undo.[/dim]"
    return None


# -- game loops ---------------------------------------------------------------


def _free_play(game: GamePlay, steps: int, reassign_gaps: bool) -> None:
    """Free play: starts solved, with shuffle and gap tools."""
    status = ""

    while True:
        _draw_game(game, status)
        key = get_key()

        status = _handle_common(game, key)
        if status is not None:
            if game.is_won and key in _DIRECTIONS:
                status = "[bold green]Solved![/bold green]"
            continue

        status = ""
        if key == "shuffle":
            status = _shuffle(game, steps, reassign_gaps)
        elif key == "randomize_gaps":
            game.randomize_gap_identities()
            status = "[yellow]New gaps picked.[/yellow]"
        elif key == "reset_gaps":
            game.reset_gap_identities()
            status = "[yellow]Original gaps restored.[/yellow]"
        elif key == "restart":
            game.reset()
        elif key == "quit":
            return


def _play_challenge(
    game: GamePlay,
    seed: int,
    steps: int,
    reassign_gaps: bool,
    manager: HighScoreManager,
) -> None:
    """Challenge: seeded shuffle; moves and time are counted and filed."""
    while True:
        game.start_challenge(seed, steps, reassign_gaps)
        status = ""

        while not game.solved:
            _draw_game(game, status)

            # Wait for input with a short timeout so the clock keeps ticking.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                _update_time(game)

            status = _handle_common(game, key) or ""
            if key == "restart":
                game.start_challenge(seed, steps, reassign_gaps)
            elif key == "quit":
                game.reset()
                return

        # -- win ---------------------------------------------------------------
        entry = HighScoreEntry(
            moves=game.state.moves,
            time=round(game.state.elapsed_time, 2),
            date=datetime.now().strftime("%Y-%m-%d %H:%M"),
        )
        rank = manager.add_score(game.challenge_key, entry)
        _draw_win(game, rank)

        console.print(
            Align.center(
                Text(
                    "\n  Press R to play again, Q to go back.\n",
                    style="dim",
                )
            )
        )

        while True:
            key = get_key()
            if key == "restart":
                break
            if key == "quit":
                game.reset()
                return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(
    manager: HighScoreManager,
    slug: str,
    wrap_h: bool,
    wrap_v: bool,
    steps: int,
    reassign_gaps: bool,
) -> None:
    slugs = board_slugs()

    while True:
        _draw_menu(slug, wrap_h, wrap_v)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(
                Align.center(Text("\nGoodbye!\n", style="bold cyan"))
            )
            return
        elif key == "left":
            slug = slugs[(slugs.index(slug) - 1) % len(slugs)]
        elif key == "right":
            slug = slugs[(slugs.index(slug) + 1) % len(slugs)]
        elif key == "4":
            wrap_h = not wrap_h
        elif key == "5":
            wrap_v = not wrap_v
        elif key in ("1", "enter"):
            _free_play(GamePlay.from_board(slug, wrap_h, wrap_v), steps, reassign_gaps)
        elif key == "2":
            seed = random.SystemRandom().randrange(1 << 31)
            game = GamePlay.from_board(slug, wrap_h, wrap_v)
            _play_challenge(game, seed, steps, reassign_gaps, manager)
        elif key in ("3", "help"):
            # 'h' maps to "help", '3' is raw char
            _draw_highscores(manager)


# -- public entry point -------------------------------------------------------


def run(
    data_dir: Path,
    board: str = "default",
    wrap_horizontal: bool = False,
    wrap_vertical: bool = False,
    seed: int | None = None,
    steps: int = DEFAULT_STEPS,
    reassign_gaps: bool = False,
) -> None:
    """Launch the Rich CLI.  A *seed* goes straight into that challenge."""
    manager = HighScoreManager(data_dir / "highscores.json")
    if seed is not None:
        game = GamePlay.from_board(board, wrap_horizontal, wrap_vertical)
        _play_challenge(game, seed, steps, reassign_gaps, manager)
        return
    _menu_loop(manager, board, wrap_horizontal, wrap_vertical, steps, reassign_gaps)
