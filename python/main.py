#!/usr/bin/env python3
"""Sliding Puzzle Game.

Usage::

    python main.py                          # interactive menu
    python main.py -f rich -s 3             # Rich terminal, 3×3
    python main.py -f pygame                # Pygame GUI (has its own menu)
    python main.py --scores                 # view high scores
    python main.py --solve -s 3 --seed 7    # print a puzzle and its solution
    python main.py --solve --cells 1,2,3,4,5,6,7,0,8
"""

import importlib
import logging
import math
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.config import PuzzleSettings, settings as default_settings  # noqa: E402
from backend.logconfig import configure_logging  # noqa: E402

logger = logging.getLogger("fifteen")


def _data_dir(settings: PuzzleSettings) -> Path:
    return settings.data_dir or PROJECT_ROOT / "data"


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


def _launch(frontend: Frontend, size: int, settings: PuzzleSettings) -> None:
    mod = importlib.import_module(_RUNNERS[frontend])
    logger.debug("Launching %s frontend (%d×%d)", frontend.value, size, size)
    mod.run(size=size, data_dir=_data_dir(settings), settings=settings)


# -- helpers ------------------------------------------------------------------


def _print_highscores(settings: PuzzleSettings) -> None:
    from backend.models.highscore import HighScoreManager

    manager = HighScoreManager(_data_dir(settings) / "highscores.json")
    sizes = manager.get_all_sizes()

    print("\n  === HIGH SCORES ===")
    if not sizes:
        print("  No high scores yet.\n")
        return
    for size in sizes:
        entries = manager.get_scores(size)
        if not entries:
            continue
        print(f"\n  --- {size}x{size} ---")
        for i, e in enumerate(entries[:10], 1):
            print(f"  {i:>2}. {e.moves:>4} moves  {e.time:>7.1f}s  ({e.date})")
    if manager.achievements:
        print(f"\n  Achievements: {', '.join(sorted(manager.achievements))}")
    print()


def _parse_cells(raw: str):
    """Turn ``"1,2,3,..."`` into a validated grid; size follows from the count."""
    from backend.models.grid import GridState, InvalidStateError

    values = [v for v in raw.replace(" ", "").split(",") if v]
    try:
        return GridState.from_cells(math.isqrt(len(values)), values)
    except InvalidStateError as exc:
        raise typer.BadParameter(str(exc), param_hint="--cells") from exc


def _print_solution(grid, settings: PuzzleSettings) -> None:
    from rich.console import Console

    from backend.engine.gamemoves.executor import replay
    from backend.engine.gamesolver.solver import NoSolutionFound, Solver
    from frontend.cli.rich.app import render_grid

    console = Console()
    console.print(render_grid(grid))
    try:
        path = Solver.solve(
            grid,
            depth_cap=settings.solver_depth_cap,
            max_nodes=settings.solver_max_nodes,
            time_limit=settings.solver_time_limit,
        )
    except NoSolutionFound as exc:
        console.print(f"[bold red]No solution:[/bold red] {exc.reason}")
        raise typer.Exit(code=1) from exc

    if not path:
        console.print("[bold green]Already solved.[/bold green]")
        return

    # Name each step by the tile that moves, e.g. "6 → 8 → 5".
    tiles: list[str] = []
    state = grid
    for target in path:
        tiles.append(str(state.tile_at(target)))
        state = replay(state, [target])
    console.print(f"[bold]{len(path)} moves:[/bold] " + " → ".join(tiles))


def _ask_size(default: int) -> int:
    raw = input(f"  Grid size (3-5, default {default}): ").strip() or str(default)
    try:
        size = int(raw)
        if not 3 <= size <= 5:
            raise ValueError
    except ValueError:
        print(f"  Invalid size; using {default}.")
        size = default
    return size


def _menu_loop(settings: PuzzleSettings) -> None:
    while True:
        print()
        print("  ====================================")
        print("       S L I D I N G   P U Z Z L E    ")
        print("  ====================================")
        print()
        print("  1.  Play  (Vanilla Terminal)")
        print("  2.  Play  (Rich Terminal)")
        print("  3.  Play  (Pygame GUI)")
        print("  4.  View High Scores")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return

        if choice in ("1", "2"):
            size = _ask_size(settings.default_size)
            _launch({"1": Frontend.vanilla, "2": Frontend.rich}[choice], size, settings)

        elif choice == "3":
            _launch(Frontend.pygame, settings.default_size, settings)

        elif choice == "4":
            _print_highscores(settings)

        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    size: Optional[int] = typer.Option(
        None, "-s", "--size",
        min=3, max=5,
        help="Grid size (3-5). Defaults to FIFTEEN_DEFAULT_SIZE or 4.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for the shuffle used by --solve.",
    ),
    steps: Optional[int] = typer.Option(
        None, "--steps",
        min=1,
        help="Shuffle walk length. Default: max(200, size*size*10).",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show high scores and exit.",
    ),
    solve: bool = typer.Option(
        False, "--solve",
        help="Print a shuffled (or --cells) puzzle and its solution, then exit.",
    ),
    cells: Optional[str] = typer.Option(
        None, "--cells",
        help="Comma-separated cells, row-major, 0 for the blank (with --solve).",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log debug output to stderr.",
    ),
) -> None:
    """Sliding Puzzle Game."""
    configure_logging(verbose)

    overrides: dict = {}
    if size is not None:
        overrides["default_size"] = size
    if steps is not None:
        overrides["shuffle_steps"] = steps
    settings = default_settings.model_copy(update=overrides)

    if scores:
        _print_highscores(settings)
        return

    if solve or cells is not None:
        from backend.engine.gamegenerator.generator import GameGenerator

        if cells is not None:
            grid = _parse_cells(cells)
        else:
            grid = GameGenerator.generate(settings.default_size, settings.shuffle_steps, seed)
        _print_solution(grid, settings)
        return

    if frontend is None:
        _menu_loop(settings)
        return

    _launch(frontend, settings.default_size, settings)


if __name__ == "__main__":
    app()
