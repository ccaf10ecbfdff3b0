"""Play in a pygame window instead of a terminal.

The window emulates a character console: it implements the same
:class:`~termtris.console.Screen` and :class:`~termtris.console.Keyboard`
operations as :class:`~termtris.run_curses.CursesConsole`, so the game itself is
unchanged.  Run with ``termtris-pygame``.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, Optional, Tuple

import pygame

from .config import GameConfig
from .console import Color
from .controls import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
    is_printable,
)
from .runner import GameRunner


LOGGER = logging.getLogger(__name__)

# Size of the emulated console in character cells.
COLUMNS = 64
ROWS = 32
FONT_SIZE = 20

PALETTE: Dict[Color, Tuple[int, int, int]] = {
    Color.BLACK: (0, 0, 0),
    Color.BLUE: (0, 0, 170),
    Color.GREEN: (0, 170, 0),
    Color.CYAN: (0, 170, 170),
    Color.RED: (170, 0, 0),
    Color.MAGENTA: (170, 0, 170),
    Color.BROWN: (170, 85, 0),
    Color.GREY: (170, 170, 170),
    Color.DARKGREY: (85, 85, 85),
    Color.LIGHTBLUE: (85, 85, 255),
    Color.LIGHTGREEN: (85, 255, 85),
    Color.LIGHTCYAN: (85, 255, 255),
    Color.LIGHTRED: (255, 85, 85),
    Color.LIGHTMAGENTA: (255, 85, 255),
    Color.YELLOW: (255, 255, 85),
    Color.WHITE: (255, 255, 255),
}

# Empty cells are drawn black-on-black in a terminal; keep them faintly
# visible here.
DEFAULT_COLOR = Color.GREY
BACKGROUND = (0, 0, 0)

_SPECIAL_KEYS = {
    pygame.K_UP: KEY_UP,
    pygame.K_DOWN: KEY_DOWN,
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_RIGHT: KEY_RIGHT,
    pygame.K_RETURN: KEY_ENTER,
    pygame.K_KP_ENTER: KEY_ENTER,
    pygame.K_ESCAPE: KEY_ESCAPE,
    pygame.K_BACKSPACE: KEY_BACKSPACE,
    pygame.K_DELETE: KEY_DELETE,
}


class WindowClosed(Exception):
    """Raised from keyboard polling once the window has been closed."""


def translate_pygame_key(key: int, unicode: str = "") -> Optional[int]:
    """Map a ``KEYDOWN`` event onto the game's key codes."""

    if key in _SPECIAL_KEYS:
        return _SPECIAL_KEYS[key]
    if len(unicode) == 1 and is_printable(ord(unicode)):
        return ord(unicode)
    return None


class PygameConsole:
    """Character console drawn into a pygame window."""

    def __init__(self, columns: int = COLUMNS, rows: int = ROWS, font_size: int = FONT_SIZE) -> None:
        self.columns = columns
        self.rows = rows
        self.font_size = font_size
        self._keys: Deque[int] = deque()
        self._x = 0
        self._y = 0
        self._color = DEFAULT_COLOR
        self._cursor_visible = False
        self._display: Optional[pygame.Surface] = None
        self._canvas: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None
        self._cell = (0, 0)

    def __enter__(self) -> "PygameConsole":
        pygame.init()
        self._font = pygame.font.SysFont("monospace", self.font_size)
        self._cell = self._font.size("M")
        size = (self._cell[0] * self.columns, self._cell[1] * self.rows)
        self._display = pygame.display.set_mode(size)
        self._canvas = pygame.Surface(size)
        self._canvas.fill(BACKGROUND)
        pygame.display.set_caption("termtris")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        pygame.quit()

    # Screen ------------------------------------------------------------
    def locate(self, x: int, y: int) -> None:
        self._x, self._y = x, y

    def set_color(self, color: Color) -> None:
        self._color = Color(color)

    def reset_color(self) -> None:
        self._color = DEFAULT_COLOR

    def write(self, text: str) -> None:
        cw, ch = self._cell
        left, top = self._x * cw, self._y * ch
        self._canvas.fill(BACKGROUND, pygame.Rect(left, top, cw * len(text), ch))
        glyphs = self._font.render(text, True, PALETTE[self._color])
        self._canvas.blit(glyphs, (left, top))
        self._x += len(text)

    def cls(self) -> None:
        self._canvas.fill(BACKGROUND)
        self._x = self._y = 0

    def show_cursor(self) -> None:
        self._cursor_visible = True

    def hide_cursor(self) -> None:
        self._cursor_visible = False

    def refresh(self) -> None:
        self._display.blit(self._canvas, (0, 0))
        if self._cursor_visible:
            cw, ch = self._cell
            caret = pygame.Rect(self._x * cw, self._y * ch + ch - 2, cw, 2)
            pygame.draw.rect(self._display, PALETTE[Color.WHITE], caret)
        pygame.display.flip()

    def msleep(self, ms: int) -> None:
        self.refresh()
        pygame.time.wait(ms)

    # Keyboard ----------------------------------------------------------
    def _pump(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                raise WindowClosed()
            if event.type == pygame.KEYDOWN:
                code = translate_pygame_key(event.key, event.unicode)
                if code is not None:
                    self._keys.append(code)

    def kbhit(self) -> bool:
        self._pump()
        return bool(self._keys)

    def getkey(self) -> int:
        while not self._keys:
            self._pump()
            if not self._keys:
                pygame.time.wait(10)
        return self._keys.popleft()


def main(config: Optional[GameConfig] = None) -> None:
    try:
        with PygameConsole() as console:
            GameRunner(console, console, config=config).run()
    except WindowClosed:
        LOGGER.info("Window closed")


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
