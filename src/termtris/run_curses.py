"""Play in a terminal through :mod:`curses`.

Run with: `python -m termtris`
"""

from __future__ import annotations

import curses
import locale
import logging
import time
from typing import Dict, Optional

from .config import GameConfig
from .console import Color
from .controls import (
    KEY_BACKSPACE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_UP,
)
from .runner import GameRunner


LOGGER = logging.getLogger(__name__)

# Dark half of the palette in curses terms; the bright half reuses these.
_CURSES_BASE = {
    Color.BLACK: curses.COLOR_BLACK,
    Color.BLUE: curses.COLOR_BLUE,
    Color.GREEN: curses.COLOR_GREEN,
    Color.CYAN: curses.COLOR_CYAN,
    Color.RED: curses.COLOR_RED,
    Color.MAGENTA: curses.COLOR_MAGENTA,
    Color.BROWN: curses.COLOR_YELLOW,
    Color.GREY: curses.COLOR_WHITE,
}

_CURSES_KEYS = {
    curses.KEY_UP: KEY_UP,
    curses.KEY_DOWN: KEY_DOWN,
    curses.KEY_LEFT: KEY_LEFT,
    curses.KEY_RIGHT: KEY_RIGHT,
    curses.KEY_ENTER: KEY_ENTER,
    curses.KEY_BACKSPACE: KEY_BACKSPACE,
    10: KEY_ENTER,
    13: KEY_ENTER,
}


def translate_curses_key(code: int) -> int:
    """Map a ``getch`` result onto the game's key codes."""

    return _CURSES_KEYS.get(code, code)


class CursesConsole:
    """:class:`Screen` and :class:`Keyboard` backed by a curses window.

    Use as a context manager; the terminal is restored on exit even if the
    game raises.
    """

    def __init__(self, stdscr: Optional["curses.window"] = None) -> None:
        self._stdscr = stdscr
        self._owns_screen = stdscr is None
        self._x = 0
        self._y = 0
        self._attr = 0
        self._attrs: Dict[Color, int] = {}

    # Lifecycle ---------------------------------------------------------
    def __enter__(self) -> "CursesConsole":
        if self._stdscr is None:
            self._stdscr = curses.initscr()
            curses.noecho()
            curses.cbreak()
        if hasattr(curses, "set_escdelay"):
            curses.set_escdelay(25)
        self._stdscr.keypad(True)
        self._stdscr.nodelay(True)
        self._init_colors()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._stdscr is not None:
            self._stdscr.keypad(False)
        if self._owns_screen:
            curses.nocbreak()
            curses.echo()
            curses.endwin()
            self._stdscr = None

    def _init_colors(self) -> None:
        self._attrs = {color: 0 for color in Color}
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        many = curses.COLORS >= 16
        for color in Color:
            fg = _CURSES_BASE[Color(color % 8)]
            attr = 0
            if color.bright:
                if many:
                    fg += 8
                else:
                    attr = curses.A_BOLD
            pair = int(color) + 1
            curses.init_pair(pair, fg, background)
            self._attrs[color] = curses.color_pair(pair) | attr

    # Screen ------------------------------------------------------------
    def locate(self, x: int, y: int) -> None:
        self._x, self._y = x, y
        try:
            self._stdscr.move(y, x)
        except curses.error:
            pass

    def set_color(self, color: Color) -> None:
        self._attr = self._attrs.get(Color(color), 0)

    def reset_color(self) -> None:
        self._attr = 0

    def write(self, text: str) -> None:
        try:
            self._stdscr.addstr(self._y, self._x, text, self._attr)
        except curses.error:
            # Writing into the bottom-right cell or past the window edge.
            pass
        self._x += len(text)

    def cls(self) -> None:
        self._stdscr.erase()
        self._x = self._y = 0

    def show_cursor(self) -> None:
        self._set_cursor(1)

    def hide_cursor(self) -> None:
        self._set_cursor(0)

    def _set_cursor(self, visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            LOGGER.debug("Terminal cannot change cursor visibility")

    def msleep(self, ms: int) -> None:
        self._stdscr.refresh()
        time.sleep(ms / 1000.0)

    def refresh(self) -> None:
        self._stdscr.refresh()

    # Keyboard ----------------------------------------------------------
    def kbhit(self) -> bool:
        code = self._stdscr.getch()
        if code == -1:
            return False
        curses.ungetch(code)
        return True

    def getkey(self) -> int:
        self._stdscr.nodelay(False)
        try:
            code = self._stdscr.getch()
        finally:
            self._stdscr.nodelay(True)
        return translate_curses_key(code)


def configure_logging(config: GameConfig) -> None:
    # The terminal belongs to curses, so logs only go to a file when asked.
    if config.log_file:
        logging.basicConfig(
            filename=config.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


def main(config: Optional[GameConfig] = None) -> None:
    config = config or GameConfig()
    locale.setlocale(locale.LC_ALL, "")
    configure_logging(config)
    with CursesConsole() as console:
        GameRunner(console, console, config=config).run()
