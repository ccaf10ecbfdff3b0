"""Utility helpers for the game engine."""

from __future__ import annotations

from .board import Board
from .config import INITIAL_SPEED, MIN_SPEED, SPEED_STEP_SCORE
from .tetromino import Tetromino


LINE_CLEAR_BONUS = 25
LINE_CLEAR_BASE = 100


def line_clear_score(lines: int) -> int:
    """Return the points awarded for clearing ``lines`` rows with one piece.

    A lock that clears nothing scores nothing.  Otherwise the award is a flat
    bonus plus ``2 ** lines`` hundreds, so a four-row clear is worth far more
    than four single clears.
    """

    if lines <= 0:
        return 0
    return LINE_CLEAR_BONUS + (1 << lines) * LINE_CLEAR_BASE


def ticks_per_drop(
    score: int,
    *,
    initial: int = INITIAL_SPEED,
    minimum: int = MIN_SPEED,
    step: int = SPEED_STEP_SCORE,
) -> int:
    """Return how many ticks pass between gravity drops at ``score``.

    The interval shrinks by one tick for every ``step`` points but never
    drops below ``minimum``.
    """

    return max(minimum, initial - score // step)


def level_for_score(score: int, step: int = SPEED_STEP_SCORE) -> int:
    """Return the one-based level shown to the player."""

    return 1 + score // step


def can_move(board: Board, tetromino: Tetromino, dx: int = 0, dy: int = 0, turns: int = 0) -> bool:
    """Return ``True`` if ``tetromino`` could be shifted by ``(dx, dy)`` and ``turns``.

    Thin wrapper over :meth:`Board.fits` for the active piece.  It is intended
    for use within the game loop to validate both movement and rotation
    attempts before they are applied.
    """

    return board.fits(
        tetromino.kind,
        tetromino.rotation + turns,
        tetromino.x + dx,
        tetromino.y + dy,
    )


def landing_y(board: Board, tetromino: Tetromino) -> int:
    """Return the row the piece's box would settle on if dropped straight down."""

    y = tetromino.y
    while board.fits(tetromino.kind, tetromino.rotation, tetromino.x, y + 1):
        y += 1
    return y
