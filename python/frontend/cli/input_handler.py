"""Single-keypress input for the terminal frontends.

WASD slides the tile next to the blank, the arrow keys move a cursor over
the grid, and Space slides every tile between the cursor and the blank.
Unix terminals are read in raw mode; Windows goes through msvcrt.
"""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from typing import Callable, Iterator

# Action -> keys that trigger it.
_BINDINGS: dict[str, str] = {
    "up": "wW",
    "down": "sS",
    "left": "aA",
    "right": "dD",
    "click": " ",
    "quit": "qQ\x03",
    "restart": "rR",
    "help": "hH?",
    "solve": "vV",
    "hint": "nN",
    "enter": "\r\n",
}

_KEY_MAP: dict[str, str] = {
    key: action for action, keys in _BINDINGS.items() for key in keys
}

# Final byte of ESC [ X on Unix, second byte after 0xE0 / 0x00 on Windows.
_ARROW_MAP: dict[str, str] = {
    "A": "cursor_up",
    "B": "cursor_down",
    "C": "cursor_right",
    "D": "cursor_left",
}
_WIN_ARROW_MAP: dict[str, str] = {
    "H": "cursor_up",
    "P": "cursor_down",
    "M": "cursor_right",
    "K": "cursor_left",
}

CURSOR_STEPS: dict[str, tuple[int, int]] = {
    "cursor_up": (-1, 0),
    "cursor_down": (1, 0),
    "cursor_left": (0, -1),
    "cursor_right": (0, 1),
}

_ESCAPE_WAIT = 0.1


def _resolve(ch: str) -> str:
    """Action for a plain key; unbound printable keys come back as themselves."""
    return _KEY_MAP.get(ch, ch if ch.isprintable() else "")


def _decode_escape(read_next: Callable[[], str | None]) -> str:
    """Finish an ESC sequence. *read_next* returns None when no byte follows."""
    if read_next() != "[":
        return "quit"
    final = read_next()
    return _ARROW_MAP.get(final, "") if final else ""


def horizontal_step(action: str) -> int:
    """-1 / +1 for actions that step a menu selection left / right, else 0."""
    if action in ("left", "cursor_left"):
        return -1
    if action in ("right", "cursor_right"):
        return 1
    return 0


# -- platform readers ----------------------------------------------------------


@contextmanager
def _raw_mode(fd: int) -> Iterator[None]:
    import termios
    import tty

    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _getch() -> str:
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]

        return msvcrt.getch().decode("utf-8", errors="ignore")
    with _raw_mode(sys.stdin.fileno()):
        return sys.stdin.read(1)


def _read_fd(fd: int, wait: float | None) -> str | None:
    import select

    ready, _, _ = select.select([fd], [], [], wait)
    if not ready:
        return None
    return os.read(fd, 1).decode("utf-8", errors="ignore")


# -- public API ----------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action.

    Actions are the keys of the binding table above plus the four
    ``cursor_*`` arrows. Escape quits, unbound printable keys are returned
    as-is (the menus use "1".."3"), anything else is "".
    """
    ch = _getch()
    if os.name == "nt" and ch in ("\xe0", "\x00"):
        return _WIN_ARROW_MAP.get(_getch(), "")
    if ch == "\x1b":
        return _decode_escape(_getch)
    return _resolve(ch)


def get_key_timeout(timeout: float) -> str | None:
    """Like ``get_key`` but returns None if nothing is pressed in *timeout* s."""
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]
        import time

        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if msvcrt.kbhit():
                return get_key()
            time.sleep(0.02)
        return None

    # os.read keeps select() aware of the rest of an escape sequence.
    fd = sys.stdin.fileno()
    with _raw_mode(fd):
        ch = _read_fd(fd, timeout)
        if ch is None:
            return None
        if ch == "\x1b":
            return _decode_escape(lambda: _read_fd(fd, _ESCAPE_WAIT))
        return _resolve(ch)
