"""Tick loop and end-of-round flow.

:class:`GameRunner` glues a :class:`~termtris.game_state.GameRound` to a
screen and a keyboard.  Everything runs on one thread: every tick polls the
keyboard once without blocking, advances the round, draws it, plays the
line-clear flash if rows were completed, and sleeps for the fixed tick length.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import GameConfig
from .console import Keyboard, Screen
from .controls import KEY_ESCAPE, Action, NameEntry, action_for_key
from .game_state import GameRound
from .leaderboard import Leaderboard
from .render import Renderer
from .rng import PieceSource, UniformPieceSource


LOGGER = logging.getLogger(__name__)

# Poll interval of the restart prompt.
PROMPT_POLL_MS = 10


class GameRunner:
    """Run rounds until the player quits."""

    def __init__(
        self,
        screen: Screen,
        keyboard: Keyboard,
        *,
        config: Optional[GameConfig] = None,
        rng: Optional[PieceSource] = None,
        score_path: Optional[Path] = None,
    ) -> None:
        self.screen = screen
        self.keyboard = keyboard
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else UniformPieceSource()
        self.score_path = Path(score_path) if score_path is not None else Path(self.config.score_file)
        self.renderer = Renderer(screen, self.config)
        self.rounds_played = 0

    def new_round(self) -> GameRound:
        game = GameRound(config=self.config, rng=self.rng)
        game.reset_game()
        return game

    def run(self) -> None:
        self.screen.hide_cursor()
        try:
            quit_game = False
            while not quit_game:
                game = self.new_round()
                self.play_round(game)
                quit_game = self.game_over_screen(game.score)
        finally:
            self.screen.show_cursor()

    # One round -----------------------------------------------------------
    def poll_action(self) -> Optional[Action]:
        """Read at most one key, without blocking, and map it to an action."""

        if not self.keyboard.kbhit():
            return None
        return action_for_key(self.keyboard.getkey())

    def step(self, game: GameRound) -> None:
        """Run one tick: input, update, draw, clear animation."""

        game.tick(self.poll_action())
        self.renderer.draw(game)
        if game.pending_clears:
            self.renderer.animate_lines(game.pending_clears)
            game.finish_clears()

    def play_round(self, game: GameRound) -> GameRound:
        self.rounds_played += 1
        LOGGER.info("Round %d started", self.rounds_played)
        self.screen.cls()
        self.renderer.draw_static_ui()
        self.renderer.draw(game)
        while not game.game_over:
            self.step(game)
            self.screen.msleep(self.config.tick_ms)
        LOGGER.info("Round %d over. Score: %d", self.rounds_played, game.score)
        return game

    # After a round -------------------------------------------------------
    def drain_keyboard(self) -> None:
        """Throw away keys typed before the name prompt appeared."""

        while self.keyboard.kbhit():
            self.keyboard.getkey()

    def read_name(self) -> str:
        entry = NameEntry(
            max_length=self.config.max_name_length,
            default_name=self.config.default_name,
        )
        self.renderer.draw_name_prompt()
        self.screen.show_cursor()
        try:
            while not entry.done:
                if self.keyboard.kbhit():
                    entry.feed(self.keyboard.getkey())
                    self.renderer.draw_name(entry.text)
                else:
                    self.screen.msleep(self.config.tick_ms)
        finally:
            self.screen.hide_cursor()
        return entry.name

    def wait_for_restart(self) -> bool:
        """Wait for R (restart, returns ``False``) or Esc (quit, returns ``True``)."""

        while True:
            self.screen.msleep(PROMPT_POLL_MS)
            if self.keyboard.kbhit():
                key = self.keyboard.getkey()
                if key in (ord("r"), ord("R")):
                    return False
                if key == KEY_ESCAPE:
                    return True

    def game_over_screen(self, score: int) -> bool:
        """Show the final score, record a new high score and offer a restart.

        Returns ``True`` if the player chose to quit.
        """

        self.renderer.draw_game_over(score)
        board = Leaderboard.load(self.score_path, capacity=self.config.max_highscores)
        if board.qualifies(score):
            self.drain_keyboard()
            name = self.read_name()
            board.add(name, score)
            board.save()
        self.renderer.draw_leaderboard(board.entries)
        return self.wait_for_restart()
