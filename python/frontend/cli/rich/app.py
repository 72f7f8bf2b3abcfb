"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same
input handler, key handling and backend as the vanilla CLI.  Includes a
built-in menu for size selection, play, study, and high scores.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.config import PuzzleSettings, settings as default_settings
from backend.engine.gamegenerator.generator import GameGenerator
from backend.engine.gamemoves.executor import MoveOutcome
from backend.engine.gameplay.game import GamePlay
from backend.models.achievements import record_win
from backend.models.grid import BLANK, SIZES, GridState
from backend.models.highscore import HighScoreEntry, HighScoreManager
from frontend.cli.controller import CliSession, Status
from frontend.cli.input_handler import get_key, get_key_timeout, horizontal_step

console = Console()

_STATUS_STYLES = {"ok": "green", "info": "cyan", "warn": "yellow", "error": "red"}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def _status_text(status: Status | None) -> Text | None:
    if status is None:
        return None
    return Text(f"  {status.text}", style=_STATUS_STYLES[status.kind])


# -- grid rendering -----------------------------------------------------------


def render_grid(
    grid: GridState,
    cursor: tuple[int, int] | None = None,
    preview: set[tuple[int, int]] | frozenset[tuple[int, int]] = frozenset(),
) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(grid.size * grid.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(grid.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(grid.rows()):
        cells: list[Text] = []
        for c, val in enumerate(row):
            label = "·" if val == BLANK else f"{val:>{width}}"
            if val == BLANK:
                style = "dim"
            elif (r, c) in preview:
                style = "bold cyan"
            elif grid.is_tile_correct((r, c)):
                style = "bold green"
            else:
                style = "bold white"
            if (r, c) == cursor:
                style += " reverse"
            cells.append(Text(label, style=style))
        table.add_row(*cells)

    return table


def _session_grid(session: CliSession) -> Table:
    return render_grid(session.game.grid, session.cursor, session.preview)


# -- menu screen --------------------------------------------------------------


def _draw_menu(sel_size: int) -> None:
    """Draw the main menu."""
    console.clear()

    sizes = Text()
    for s in SIZES:
        if s > SIZES[0]:
            sizes.append("  ")
        if s == sel_size:
            sizes.append(f" {s}×{s} ", style="bold green on #313244")
        else:
            sizes.append(f" {s}×{s} ", style="dim")

    nav = Text("  ← →  change size", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="bold yellow")
    opts.append("  Study    ")
    opts.append("3", style="dim bold")
    opts.append("  Scores    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(sizes),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )

    panel = Panel(
        body,
        title="[bold]S L I D I N G   P U Z Z L E[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )

    console.print()
    console.print(Align.center(panel))


# -- game screens -------------------------------------------------------------


def _controls(study: bool) -> Text:
    controls = Text()
    controls.append("  WASD", style="bold cyan")
    controls.append("  slide   ", style="dim")
    controls.append("↑↓←→", style="bold cyan")
    controls.append("  cursor   ", style="dim")
    controls.append("Space", style="bold cyan")
    controls.append("  slide row/col   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    if study:
        controls.append("R", style="bold yellow")
        controls.append("  scramble   ", style="dim")
        controls.append("V", style="bold cyan")
        controls.append("  solve   ", style="dim")
    else:
        controls.append("R", style="bold cyan")
        controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")
    return controls


def _stats(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")
    left = game.state.time_left
    if left is not None:
        stats.append("    Left: ", style="dim")
        stats.append(_format_time(left), style="bold red" if left < 10 else "bold yellow")
    return stats


def _best(manager: HighScoreManager, size: int) -> Text:
    moves = manager.best_moves(size)
    best_time = manager.best_time(size)
    if moves is None or best_time is None:
        return Text("  Best: none yet", style="dim")
    text = Text("  Best: ", style="dim")
    text.append(f"{moves} moves", style="yellow")
    text.append("  ·  ", style="dim")
    text.append(_format_time(best_time), style="yellow")
    return text


def _draw_game(session: CliSession, manager: HighScoreManager) -> None:
    """Draw the game screen (play mode — stats visible, hint only)."""
    console.clear()

    game = session.game
    size = game.size
    panel = Panel(
        Align.center(_session_grid(session)),
        title=f"[bold cyan]Sliding Puzzle  {size}×{size}[/bold cyan]",
        subtitle=_best(manager, size),
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Save cursor position right before the stats line so _update_time()
    # can later restore to this exact spot and overwrite only this line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats(game)))
    status = _status_text(session.take_status())
    if status:
        console.print(Align.center(status))
    console.print(Align.center(_controls(study=False)))


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats line using the saved cursor position.

    Uses raw ANSI codes (bypassing Rich) so only the single stats
    line is repainted — no flicker from a full redraw.
    """
    _DIM = "\033[2m"
    _YB = "\033[33;1m"
    _RS = "\033[0m"

    elapsed = _format_time(game.state.elapsed_time)
    stats_raw = (
        f"{_DIM}Moves: {_RS}{_YB}{game.state.moves}{_RS}"
        f"    {_DIM}Time: {_RS}{_YB}{elapsed}{_RS}"
    )
    visible = f"Moves: {game.state.moves}    Time: {elapsed}"
    left = game.state.time_left
    if left is not None:
        stats_raw += f"    {_DIM}Left: {_RS}{_YB}{_format_time(left)}{_RS}"
        visible += f"    Left: {_format_time(left)}"

    # Centre the visible text to match what Rich would produce.
    pad = max(0, (console.width - len(visible)) // 2)

    sys.stdout.write(f"\033[u\033[K{' ' * pad}{stats_raw}")
    sys.stdout.flush()


def _draw_study(session: CliSession, title: str = "Study") -> None:
    """Draw the study screen (no stats, scramble/solve available)."""
    console.clear()

    size = session.game.size
    panel = Panel(
        Align.center(_session_grid(session)),
        title=f"[bold yellow]{title}  {size}×{size}[/bold yellow]",
        border_style="yellow",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    status = _status_text(session.take_status())
    if status:
        console.print(Align.center(status))
    console.print(Align.center(_controls(study=True)))


def _draw_end(game: GamePlay, earned: list[str]) -> None:
    console.clear()

    size = game.size
    if game.is_won:
        headline = Text()
        headline.append("\n  ★ ", style="bold yellow")
        headline.append("CONGRATULATIONS!", style="bold green")
        headline.append("  You solved it!  ", style="green")
        headline.append("★\n", style="bold yellow")
        if game.state.is_optimal_win:
            headline.append("Optimal win!\n", style="bold cyan")
        border = "bold green"
    else:
        headline = Text("\n  Time's up!\n", style="bold red")
        border = "bold red"

    parts = [
        Align.center(render_grid(game.grid)),
        Align.center(headline),
        Align.center(_stats(game)),
    ]
    for name in earned:
        parts.append(Align.center(Text(f"✦ Achievement unlocked: {name}", style="yellow")))

    panel = Panel(
        Group(*parts),
        title=f"[{border}]Sliding Puzzle  {size}×{size}[/{border}]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))


def _draw_highscores(manager: HighScoreManager) -> None:
    """Full-screen high-scores view (used from the menu)."""
    console.clear()

    sizes = manager.get_all_sizes()
    parts: list[Align] = []

    if not sizes:
        parts.append(Align.center(Text("  No high scores yet.", style="dim")))
    else:
        for size in sizes:
            hs_table = Table(
                title=f"{size}×{size}",
                title_style="bold cyan",
                box=rich.box.ROUNDED,
                border_style="dim",
                show_lines=False,
            )
            hs_table.add_column("#", justify="right", style="dim", width=3)
            hs_table.add_column("Moves", justify="right", style="yellow")
            hs_table.add_column("Time", justify="right", style="yellow")
            hs_table.add_column("Date", style="dim")

            for i, e in enumerate(manager.get_scores(size)[:10], 1):
                hs_table.add_row(str(i), str(e.moves), f"{e.time:.1f}s", e.date)
            parts.append(Align.center(hs_table))

    if manager.achievements:
        parts.append(
            Align.center(
                Text("Achievements: " + ", ".join(sorted(manager.achievements)), style="yellow")
            )
        )

    panel = Panel(
        Group(*parts),
        title="[bold]HIGH  SCORES[/bold]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loops ---------------------------------------------------------------


def _play_game(size: int, manager: HighScoreManager, settings: PuzzleSettings) -> None:
    """Play mode — hint only, scored."""
    while True:
        session = CliSession(GamePlay(size, settings))

        while not session.game.is_won and not session.game.is_lost:
            _draw_game(session, manager)

            # Wait for input with a short timeout so the clock keeps ticking.
            while True:
                key = get_key_timeout(0.5)
                if key is not None or session.game.is_lost:
                    break
                _update_time(session.game)
            if key is None:
                continue

            if session.handle(key):
                pass
            elif key == "hint":
                session.hint()
            elif key == "restart":
                session = CliSession(GamePlay(size, settings))
            elif key == "quit":
                return

        # -- end ---------------------------------------------------------------
        game = session.game
        game.state.pause()
        earned: list[str] = []
        if game.is_won:
            elapsed = round(game.state.elapsed_time, 2)
            manager.add_score(
                size,
                HighScoreEntry(
                    moves=game.state.moves,
                    time=elapsed,
                    date=datetime.now().strftime("%Y-%m-%d %H:%M"),
                ),
            )
            earned = [a.name for a in record_win(manager, size, game.state.moves, elapsed)]
        _draw_end(game, earned)

        console.print(
            Align.center(Text("\n  Press R to play again, Q to go back.\n", style="dim"))
        )

        while True:
            key = get_key()
            if key == "restart":
                break
            if key == "quit":
                return


def _study_game(size: int, settings: PuzzleSettings) -> None:
    """Study mode — starts solved, scramble/hint/solve available."""
    session = CliSession(GamePlay.from_grid(GameGenerator.solved(size), settings))
    delay = settings.animation_speed / 1000

    def draw_step(outcome: MoveOutcome, i: int, total: int) -> None:
        tiles = ", ".join(str(r.tile) for r in outcome.relocations)
        session.status = Status("info", f"Solving… move {i + 1}/{total} (tile {tiles})")
        _draw_study(session, "Auto-Solve")

    while True:
        _draw_study(session)
        key = get_key()

        if session.handle(key):
            continue
        if key == "restart":
            grid = GameGenerator.generate(size, settings.shuffle_steps)
            session = CliSession(GamePlay.from_grid(grid, settings))
            session.status = Status("warn", "Scrambled!")
        elif key == "hint":
            session.hint()
        elif key == "solve":
            with console.status("[cyan]Searching for the shortest solution…[/cyan]"):
                path = session.find_solution()
            if path:
                session.play_solution(path, draw_step, delay)
        elif key == "quit":
            return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(size: int, data_dir: Path, settings: PuzzleSettings) -> None:
    manager = HighScoreManager(data_dir / "highscores.json")
    sel_size = size

    while True:
        _draw_menu(sel_size)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif horizontal_step(key):
            sel_size = min(SIZES[-1], max(SIZES[0], sel_size + horizontal_step(key)))
        elif key in ("1", "enter"):
            _play_game(sel_size, manager, settings)
        elif key == "2":
            _study_game(sel_size, settings)
        elif key in ("3", "help"):
            # 'h' maps to "help", '3' is raw char
            _draw_highscores(manager)


# -- public entry point -------------------------------------------------------


def run(
    size: int = 4,
    data_dir: Path = Path("data"),
    settings: PuzzleSettings | None = None,
) -> None:
    """Launch the Rich CLI with interactive menu."""
    _menu_loop(size, data_dir, settings or default_settings)
