from backend.models.grid import (
    BLANK,
    DIRECTION_OFFSETS,
    Direction,
    GridState,
    InvalidStateError,
    Position,
)
from backend.models.highscore import HighScoreEntry, HighScoreManager

__all__ = [
    "BLANK",
    "DIRECTION_OFFSETS",
    "Direction",
    "GridState",
    "HighScoreEntry",
    "HighScoreManager",
    "InvalidStateError",
    "Position",
]
