"""High level state for one play-through.

A :class:`GameRound` owns the board, the falling piece, the hold slot, the
score and the rows waiting to be cleared.  It knows nothing about time or the
terminal: the runner calls :meth:`GameRound.tick` once per fixed interval with
whatever action the keyboard produced, draws, and plays the clear animation
before calling :meth:`GameRound.finish_clears`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from .board import Board
from .config import GameConfig
from .controls import Action
from .rng import PieceSource, UniformPieceSource
from .tetromino import PieceKind, Tetromino
from .utils import can_move, landing_y, level_for_score, line_clear_score, ticks_per_drop


LOGGER = logging.getLogger(__name__)


class RoundPhase(Enum):
    SPAWNING = auto()
    FALLING = auto()
    PAUSED = auto()
    LOCKING = auto()
    CLEARING = auto()
    GAME_OVER = auto()


@dataclass
class GameRound:
    """Mutable state for a single game round."""

    config: GameConfig = field(default_factory=GameConfig)
    rng: PieceSource = field(default_factory=UniformPieceSource)
    board: Board = field(init=False)
    active: Optional[Tetromino] = None
    upcoming: Optional[PieceKind] = None
    held: Optional[PieceKind] = None
    hold_used: bool = False
    score: int = 0
    speed: int = field(init=False)
    speed_counter: int = 0
    paused: bool = False
    pending_clears: List[int] = field(default_factory=list)
    phase: RoundPhase = RoundPhase.SPAWNING

    def __post_init__(self) -> None:
        self.board = Board(self.config.width, self.config.height)
        self.speed = self.config.initial_speed

    # Derived values ----------------------------------------------------
    @property
    def level(self) -> int:
        return level_for_score(self.score, self.config.speed_step_score)

    @property
    def game_over(self) -> bool:
        return self.phase is RoundPhase.GAME_OVER

    @property
    def ghost_y(self) -> Optional[int]:
        """Row the active piece would land on, or ``None`` without a piece."""

        if self.active is None:
            return None
        return landing_y(self.board, self.active)

    # Lifecycle -----------------------------------------------------------
    def reset_game(self) -> None:
        """Reset the entire round state for a new game."""

        self.board = Board(self.config.width, self.config.height)
        self.score = 0
        self.speed = self.config.initial_speed
        self.speed_counter = 0
        self.paused = False
        self.held = None
        self.hold_used = False
        self.pending_clears = []
        self.active = None
        self.upcoming = self.rng.next_kind()
        self.spawn_tetromino()

    def _spawn_piece(self, kind: PieceKind) -> Tetromino:
        return Tetromino(kind, rotation=0, x=self.config.spawn_x, y=0)

    def spawn_tetromino(self) -> Tetromino:
        """Spawn and return a new active tetromino.

        The piece in ``upcoming`` becomes active and a new upcoming piece is
        drawn.  The hold flag is reset so the player may hold again.  If the
        new piece does not fit at the spawn position the round is over.
        """

        self.phase = RoundPhase.SPAWNING
        shape = self.upcoming if self.upcoming is not None else self.rng.next_kind()
        self.active = self._spawn_piece(shape)
        self.upcoming = self.rng.next_kind()
        self.hold_used = False
        if can_move(self.board, self.active):
            self.phase = RoundPhase.FALLING
        else:
            LOGGER.info("Game over: %s does not fit at spawn. Score: %d", shape.name, self.score)
            self.phase = RoundPhase.GAME_OVER
        return self.active

    def end(self) -> None:
        """End the round immediately, as when the player quits."""

        if not self.game_over:
            LOGGER.info("Round ended by player. Score: %d", self.score)
        self.phase = RoundPhase.GAME_OVER

    # Player actions ------------------------------------------------------
    def _try_shift(self, dx: int = 0, dy: int = 0, turns: int = 0) -> bool:
        if self.active is None:
            return False
        candidate = self.active.moved(dx, dy, turns)
        if not self.board.fits(candidate.kind, candidate.rotation, candidate.x, candidate.y):
            return False
        self.active = candidate
        return True

    def move_left(self) -> bool:
        return self._try_shift(dx=-1)

    def move_right(self) -> bool:
        return self._try_shift(dx=1)

    def soft_drop(self) -> bool:
        return self._try_shift(dy=1)

    def rotate(self) -> bool:
        """Rotate one step in place.  There are no wall kicks."""

        return self._try_shift(turns=1)

    def hard_drop(self) -> int:
        """Drop the active piece as far as it fits and lock it.

        Returns the number of rows the piece fell.
        """

        if self.active is None:
            return 0
        target = landing_y(self.board, self.active)
        distance = target - self.active.y
        self.active.y = target
        self.step_down()
        return distance

    def swap_hold(self) -> bool:
        """Swap the active piece with the held one.

        Only one hold is allowed per piece; the allowance comes back when a
        piece locks and a new one spawns.  The first hold of a round stashes
        the active piece and brings in the upcoming one.  The incoming piece
        always restarts from the spawn position, and a hold is refused if it
        would not fit there.
        """

        if self.active is None or self.hold_used:
            return False

        incoming = self.upcoming if self.held is None else self.held
        if incoming is None or not self.board.fits(incoming, 0, self.config.spawn_x, 0):
            return False

        current = self.active.kind
        if self.held is None:
            self.upcoming = self.rng.next_kind()
        self.held = current
        self.active = self._spawn_piece(incoming)
        self.hold_used = True
        LOGGER.debug("Held %s, now playing %s", current.name, incoming.name)
        return True

    def toggle_pause(self) -> bool:
        if self.game_over or self.phase is RoundPhase.CLEARING:
            return self.paused
        self.paused = not self.paused
        self.phase = RoundPhase.PAUSED if self.paused else RoundPhase.FALLING
        LOGGER.debug("Paused" if self.paused else "Resumed")
        return self.paused

    # Gravity and locking ---------------------------------------------------
    def step_down(self) -> None:
        """Move the piece down a row, or lock it and spawn the next one."""

        if self.active is None:
            return
        if self._try_shift(dy=1):
            return

        self.phase = RoundPhase.LOCKING
        piece = self.active
        self.board.lock_piece(piece.kind, piece.rotation, piece.x, piece.y)
        LOGGER.debug("Locked %s at (%d, %d) rotation %d", piece.kind.name, piece.x, piece.y, piece.rotation)
        cleared = self.board.mark_complete_rows(piece.y)
        if cleared:
            self.pending_clears.extend(cleared)
            self.score += line_clear_score(len(cleared))
            self.speed = ticks_per_drop(
                self.score,
                initial=self.config.initial_speed,
                minimum=self.config.min_speed,
                step=self.config.speed_step_score,
            )
            LOGGER.info("Cleared %d row(s). Score: %d", len(cleared), self.score)

        self.spawn_tetromino()
        if self.pending_clears and not self.game_over:
            self.phase = RoundPhase.CLEARING

    def finish_clears(self) -> List[int]:
        """Remove the rows marked for clearing and return their indices."""

        rows = list(self.pending_clears)
        if rows:
            self.board.collapse_rows(rows)
            self.pending_clears.clear()
        if self.phase is RoundPhase.CLEARING:
            self.phase = RoundPhase.FALLING
        return rows

    def apply(self, action: Action) -> bool:
        """Apply a movement or hold action.  Returns whether anything changed."""

        if action is Action.LEFT:
            return self.move_left()
        if action is Action.RIGHT:
            return self.move_right()
        if action is Action.SOFT_DROP:
            return self.soft_drop()
        if action is Action.ROTATE:
            return self.rotate()
        if action is Action.HARD_DROP:
            self.hard_drop()
            return True
        if action is Action.HOLD:
            return self.swap_hold()
        return False

    def tick(self, action: Optional[Action] = None) -> None:
        """Advance the round by one tick.

        Gravity fires when the tick counter reaches the current speed.  At
        most one action is processed per tick.  While paused only the pause
        and quit actions are honoured and the counter stands still.  Nothing
        happens while rows are waiting to be cleared or after the round ended.
        """

        if self.game_over or self.phase is RoundPhase.CLEARING:
            return

        if not self.paused:
            self.speed_counter += 1
        force_down = self.speed_counter >= self.speed

        if action is Action.QUIT:
            self.end()
            return
        if action is Action.PAUSE:
            self.toggle_pause()
        elif action is not None and not self.paused:
            if action is Action.HARD_DROP:
                # hard_drop locks itself; gravity has nothing left to do.
                self.apply(action)
                self.speed_counter = 0
                return
            self.apply(action)

        if not self.paused and force_down:
            self.speed_counter = 0
            self.step_down()
