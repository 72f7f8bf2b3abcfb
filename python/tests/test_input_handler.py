"""Raw keys to actions for the terminal frontends."""

from __future__ import annotations

import pytest

from frontend.cli import input_handler
from frontend.cli.input_handler import _decode_escape, _resolve, get_key


@pytest.mark.parametrize(
    "ch, action",
    [
        ("w", "up"),
        ("S", "down"),
        ("a", "left"),
        ("D", "right"),
        (" ", "click"),
        ("\x03", "quit"),
        ("?", "help"),
        ("v", "solve"),
        ("n", "hint"),
        ("\r", "enter"),
        ("2", "2"),  # menu choice passes through
        ("\x07", ""),
    ],
)
def test_resolve(ch: str, action: str) -> None:
    assert _resolve(ch) == action


@pytest.mark.parametrize(
    "tail, action",
    [
        (["[", "A"], "cursor_up"),
        (["[", "D"], "cursor_left"),
        (["[", "Z"], ""),
        (["[", None], ""),
        ([None], "quit"),
        (["x"], "quit"),
    ],
)
def test_decode_escape(tail: list, action: str) -> None:
    pending = iter(tail)
    assert _decode_escape(lambda: next(pending)) == action


@pytest.mark.skipif(input_handler.os.name == "nt", reason="Unix key sequences")
def test_get_key_reads_arrow_sequence(monkeypatch: pytest.MonkeyPatch) -> None:
    keys = iter("\x1b[Cw")
    monkeypatch.setattr(input_handler, "_getch", lambda: next(keys))

    assert get_key() == "cursor_right"
    assert get_key() == "up"
