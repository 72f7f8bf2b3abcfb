"""Settings loaded from FIFTEEN_* environment variables."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from backend.config import PuzzleSettings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DEFAULT_SIZE", "SOLVER_DEPTH_CAP", "SOLVER_MAX_NODES", "TIME_LIMIT"):
        monkeypatch.delenv(f"FIFTEEN_{name}", raising=False)

    settings = PuzzleSettings(_env_file=None)

    assert settings.default_size == 4
    assert settings.shuffle_steps is None
    assert settings.solver_depth_cap == 50
    assert settings.solver_max_nodes == 500_000
    assert settings.solver_time_limit is None
    assert settings.max_moves_for_win == 100
    assert settings.time_limit == 0
    assert settings.animation_speed == 250


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("FIFTEEN_DEFAULT_SIZE", "3")
    monkeypatch.setenv("FIFTEEN_SOLVER_MAX_NODES", "2000")
    monkeypatch.setenv("FIFTEEN_SOLVER_TIME_LIMIT", "1.5")
    monkeypatch.setenv("FIFTEEN_DATA_DIR", str(tmp_path))

    settings = PuzzleSettings(_env_file=None)

    assert settings.default_size == 3
    assert settings.solver_max_nodes == 2000
    assert settings.solver_time_limit == 1.5
    assert settings.data_dir == tmp_path


def test_env_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("FIFTEEN_SHUFFLE_STEPS", raising=False)
    env = tmp_path / ".env"
    env.write_text("FIFTEEN_SHUFFLE_STEPS=77\n")

    settings = PuzzleSettings(_env_file=env)
    assert settings.shuffle_steps == 77


@pytest.mark.parametrize("size", ["2", "6"])
def test_size_out_of_range(monkeypatch: pytest.MonkeyPatch, size: str) -> None:
    monkeypatch.setenv("FIFTEEN_DEFAULT_SIZE", size)
    with pytest.raises(ValidationError):
        PuzzleSettings(_env_file=None)
