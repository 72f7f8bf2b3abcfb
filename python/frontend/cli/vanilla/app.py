"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
Includes a built-in menu for size selection, play, study, and high scores.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

from backend.config import PuzzleSettings, settings as default_settings
from backend.engine.gamegenerator.generator import GameGenerator
from backend.engine.gamemoves.executor import MoveOutcome
from backend.engine.gameplay.game import GamePlay
from backend.models.achievements import record_win
from backend.models.grid import BLANK, SIZES
from backend.models.highscore import HighScoreEntry, HighScoreManager
from frontend.cli.controller import CliSession, Status
from frontend.cli.input_handler import get_key, get_key_timeout, horizontal_step


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_REV = "\033[7m"     # reverse video (cursor)
_R = "\033[0m"       # reset
_BG_SEL = "\033[42;30m"  # green bg, black fg (selected size)

_STATUS_COLOURS = {"ok": _G, "info": _C, "warn": _Y, "error": _RED}


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}" if m else f"{s}s"


def _format_status(status: Status | None) -> str:
    if status is None:
        return ""
    return f"{_STATUS_COLOURS[status.kind]}{status.text}{_R}"


def _stats_line(game: GamePlay) -> str:
    """Return the formatted Moves + Time string (no newline)."""
    line = (
        f"  Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(game.state.elapsed_time)}{_R}"
    )
    left = game.state.time_left
    if left is not None:
        line += f"  |  Left: {_RED if left < 10 else _Y}{_format_time(left)}{_R}"
    return line


# -- grid rendering -----------------------------------------------------------


def _render_grid(session: CliSession) -> str:
    """Return an ANSI-coloured text representation of the grid."""
    grid = session.game.grid
    preview = session.preview
    width = len(str(grid.size * grid.size - 1))  # widest number
    cell_w = width + 2  # padding
    sep = "+" + (("-" * cell_w + "+") * grid.size)

    lines: list[str] = [sep]
    for r, row in enumerate(grid.rows()):
        cells: list[str] = []
        for c, val in enumerate(row):
            text = f" {'·' if val == BLANK else val:>{width}} "
            if (r, c) == session.cursor:
                style = _REV
            elif val == BLANK:
                style = _DIM
            elif (r, c) in preview:
                style = _C
            elif grid.is_tile_correct((r, c)):
                style = _G
            else:
                style = ""
            cells.append(f"{style}{text}{_R}" if style else text)
        lines.append("|" + "|".join(cells) + "|")
        lines.append(sep)
    return "\n".join(lines)


def _best_line(manager: HighScoreManager, size: int) -> str:
    moves = manager.best_moves(size)
    best_time = manager.best_time(size)
    if moves is None or best_time is None:
        return f"  {_DIM}Best: none yet{_R}"
    return f"  {_DIM}Best:{_R} {moves} moves  |  {_format_time(best_time)}"


# -- menu screen --------------------------------------------------------------


def _show_menu(sel_size: int) -> None:
    _clear()
    print()
    print(f"  {_BOLD}======================================{_R}")
    print(f"  {_BOLD}     S L I D I N G   P U Z Z L E     {_R}")
    print(f"  {_BOLD}======================================{_R}")
    print()

    sizes_str = ""
    for s in SIZES:
        if s == sel_size:
            sizes_str += f"  {_BG_SEL} {s}×{s} {_R}"
        else:
            sizes_str += f"  {_DIM}{s}×{s}{_R}"
    print(f"    Size:{sizes_str}")
    print(f"    {_DIM}← → to change{_R}")
    print()

    print(f"    {_C}1{_R}  Play")
    print(f"    {_Y}2{_R}  Study")
    print(f"    {_DIM}3{_R}  High Scores")
    print(f"    {_DIM}Q{_R}  Quit")
    print()


# -- game screens -------------------------------------------------------------

_CONTROLS = (
    f"  {_C}WASD{_R}: slide  |  {_C}Arrows{_R}: cursor  |  "
    f"{_C}Space{_R}: slide row/col  |  "
)


def _show_game(session: CliSession, manager: HighScoreManager) -> None:
    """Draw the full game screen.

    The stats line is printed last, with no trailing newline, so
    ``_update_time`` can cheaply overwrite it in-place using ``\\r\\033[K``.
    """
    _clear()
    game = session.game
    size = game.size
    print(f"  {_C}=== Sliding Puzzle ({size}×{size}) ==={_R}")
    print()
    print(_render_grid(session))
    print()
    print(_best_line(manager, size))
    print(_CONTROLS + f"{_C}N{_R}: hint  |  {_C}R{_R}: restart  |  {_C}Q{_R}: back")
    status = session.take_status()
    if status:
        print(f"  {_format_status(status)}")
    sys.stdout.write(f"\n{_stats_line(game)}")
    sys.stdout.flush()


def _update_time(game: GamePlay) -> None:
    """Overwrite just the stats (last) line in-place."""
    sys.stdout.write(f"\r\033[K{_stats_line(game)}")
    sys.stdout.flush()


def _show_study(session: CliSession, title: str = "Study") -> None:
    _clear()
    size = session.game.size
    print(f"  {_Y}=== {title} ({size}×{size}) ==={_R}")
    print()
    print(_render_grid(session))
    status = session.take_status()
    if status:
        print(f"\n  {_format_status(status)}")
    print()
    print(
        _CONTROLS + f"{_Y}R{_R}: scramble  |  {_C}N{_R}: hint  |  "
        f"{_C}V{_R}: solve  |  {_C}Q{_R}: back"
    )


def _show_end(game: GamePlay, earned: list[str]) -> None:
    _clear()
    size = game.size
    won = game.is_won
    colour = _G if won else _RED
    print(f"  {colour}=== Sliding Puzzle ({size}×{size}) ==={_R}")
    print()
    print(_render_grid(CliSession(game)))
    print()
    if won:
        print(f"  {_G}★ CONGRATULATIONS! You solved it! ★{_R}")
        if game.state.is_optimal_win:
            print(f"  {_C}Optimal win!{_R}")
    else:
        print(f"  {_RED}Time's up!{_R}")
    print()
    print(
        f"  Moves: {_Y}{game.state.moves}{_R}  |  "
        f"Time: {_Y}{_format_time(game.state.elapsed_time)}{_R}"
    )
    for name in earned:
        print(f"  {_Y}✦ Achievement unlocked:{_R} {name}")


def _show_highscores(manager: HighScoreManager) -> None:
    _clear()
    print()
    print(f"  {_BOLD}=== HIGH SCORES ==={_R}")
    sizes = manager.get_all_sizes()
    if not sizes:
        print(f"\n  {_DIM}No high scores yet.{_R}")
    else:
        for size in sizes:
            print(f"\n  {_C}--- {size}×{size} ---{_R}")
            scores = manager.get_scores(size)
            for i, e in enumerate(scores[:10], 1):
                print(
                    f"  {i:>2}. {_Y}{e.moves:>4}{_R} moves  "
                    f"{_Y}{e.time:>7.1f}s{_R}  "
                    f"{_DIM}({e.date}){_R}"
                )
    if manager.achievements:
        print(f"\n  {_BOLD}Achievements:{_R} {', '.join(sorted(manager.achievements))}")
    print(f"\n  {_DIM}Press any key to go back.{_R}")
    get_key()


# -- game loops ---------------------------------------------------------------


def _play_game(size: int, manager: HighScoreManager, settings: PuzzleSettings) -> None:
    """Play mode — hint only, scored."""
    while True:
        session = CliSession(GamePlay(size, settings))

        while not session.game.is_won and not session.game.is_lost:
            _show_game(session, manager)

            # Wait for input; update the time display every 0.5 s.
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
        _show_end(game, earned)
        if game.is_won:
            print(f"\n  {_DIM}Score saved!{_R}")
        print(f"\n  Press {_C}R{_R} to play again, {_C}Q{_R} to go back.")

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
        session.status = Status("info", f"Solving… move {i + 1}/{total}")
        _show_study(session, "Solving")

    while True:
        _show_study(session)
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
            session.status = Status("info", "Thinking…")
            _show_study(session)
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
        _show_menu(sel_size)
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        elif horizontal_step(key):
            sel_size = min(SIZES[-1], max(SIZES[0], sel_size + horizontal_step(key)))
        elif key in ("1", "enter"):
            _play_game(sel_size, manager, settings)
        elif key == "2":
            _study_game(sel_size, settings)
        elif key in ("3", "help"):
            # 'h' maps to "help", '3' is raw char
            _show_highscores(manager)


# -- public entry point -------------------------------------------------------


def run(
    size: int = 4,
    data_dir: Path = Path("data"),
    settings: PuzzleSettings | None = None,
) -> None:
    """Launch the vanilla CLI with interactive menu."""
    _menu_loop(size, data_dir, settings or default_settings)
