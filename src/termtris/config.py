"""Tunable gameplay numbers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# Playfield size including the two wall columns and the floor row.
FIELD_WIDTH = 12
FIELD_HEIGHT = 22

# Real-time length of one game tick.
TICK_MS = 50

# Ticks per gravity drop at the start of a round, and the fastest it gets.
INITIAL_SPEED = 20
MIN_SPEED = 2
# Every this many points the drop interval shrinks by one tick.
SPEED_STEP_SCORE = 500

# Line-clear flash: number of frames and milliseconds per frame.
CLEAR_FLASH_FRAMES = 6
CLEAR_FLASH_MS = 80

MAX_HIGHSCORES = 5
MAX_NAME_LENGTH = 10
DEFAULT_NAME = "Player"
SCORE_FILE = "highscores.txt"


@dataclass(frozen=True)
class GameConfig:
    """Settings shared by a game round, the runner and the leaderboard."""

    width: int = FIELD_WIDTH
    height: int = FIELD_HEIGHT
    tick_ms: int = TICK_MS
    initial_speed: int = INITIAL_SPEED
    min_speed: int = MIN_SPEED
    speed_step_score: int = SPEED_STEP_SCORE
    clear_flash_frames: int = CLEAR_FLASH_FRAMES
    clear_flash_ms: int = CLEAR_FLASH_MS
    max_highscores: int = MAX_HIGHSCORES
    max_name_length: int = MAX_NAME_LENGTH
    default_name: str = DEFAULT_NAME
    score_file: str = SCORE_FILE
    log_file: Optional[str] = None

    @property
    def spawn_x(self) -> int:
        """Column of the left edge of a freshly spawned piece's 4x4 box."""

        return self.width // 2 - 2
