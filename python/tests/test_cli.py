"""Command line: --solve, --cells and --scores without starting a frontend."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

import main
from backend.config import PuzzleSettings

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(
        main, "default_settings", PuzzleSettings(data_dir=tmp_path, _env_file=None)
    )


def test_solve_seeded_puzzle() -> None:
    result = runner.invoke(main.app, ["--solve", "-s", "3", "--steps", "10", "--seed", "1"])

    assert result.exit_code == 0, result.output
    assert "moves:" in result.output


def test_solve_is_reproducible() -> None:
    args = ["--solve", "-s", "3", "--steps", "16", "--seed", "9"]
    assert runner.invoke(main.app, args).output == runner.invoke(main.app, args).output


def test_solve_given_cells() -> None:
    result = runner.invoke(main.app, ["--solve", "--cells", "1,2,3,4,5,6,7,0,8"])

    assert result.exit_code == 0, result.output
    assert "1 moves: 8" in result.output


def test_solved_cells() -> None:
    result = runner.invoke(main.app, ["--cells", "1,2,3,4,5,6,7,8,0"])

    assert result.exit_code == 0, result.output
    assert "Already solved" in result.output


def test_unsolvable_cells_exit_with_error() -> None:
    result = runner.invoke(main.app, ["--solve", "--cells", "2,1,3,4,5,6,7,8,0"])

    assert result.exit_code == 1
    assert "unsolvable" in result.output


@pytest.mark.parametrize(
    "cells",
    ["1,1,3,4,5,6,7,8,0", "1,2,3", "a,b,c,d,e,f,g,h,0"],
    ids=["duplicate", "too-short", "not-numbers"],
)
def test_malformed_cells_rejected(cells: str) -> None:
    result = runner.invoke(main.app, ["--solve", "--cells", cells])
    assert result.exit_code == 2


def test_size_out_of_range() -> None:
    result = runner.invoke(main.app, ["--solve", "-s", "7"])
    assert result.exit_code == 2


def test_scores_empty() -> None:
    result = runner.invoke(main.app, ["--scores"])

    assert result.exit_code == 0
    assert "No high scores yet." in result.output
