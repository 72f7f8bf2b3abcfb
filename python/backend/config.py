"""Sliding puzzle configuration."""

from pathlib import Path

from dotenv import find_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv(usecwd=True) or None


class PuzzleSettings(BaseSettings):
    """Configuration settings for games, shuffling and the solver.

    Every field can be set with a ``FIFTEEN_`` prefixed environment variable,
    e.g. ``FIFTEEN_SOLVER_MAX_NODES=200000``.
    """

    default_size: int = Field(4, ge=3, le=5)
    """Grid side length used when no size is given. Default: 4."""

    shuffle_steps: int | None = Field(None, ge=1)
    """Random walk length for new games. If None (default), uses max(200, size*size*10)."""

    solver_depth_cap: int = Field(50, ge=1)
    """Deepest node (in single-tile moves) the solver still expands. Default: 50."""

    solver_max_nodes: int | None = Field(500_000, ge=1)
    """Maximum number of node expansions per solve. None means unlimited."""

    solver_time_limit: float | None = Field(None, gt=0)
    """Wall-clock ceiling for one solve, in seconds. None (default) means no limit."""

    max_moves_for_win: int = Field(100, ge=1)
    """A win in at most this many moves counts as an optimal win. Default: 100."""

    time_limit: int = Field(0, ge=0)
    """Seconds allowed per game; 0 (default) disables the limit."""

    animation_speed: int = Field(250, ge=0)
    """Milliseconds per slide animation in GUI and solver playback. Default: 250."""

    data_dir: Path | None = None
    """Where high scores are stored. If None, the project's ``data`` directory."""

    model_config = SettingsConfigDict(
        env_prefix="FIFTEEN_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = PuzzleSettings()
