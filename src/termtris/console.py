"""Console collaborators: the screen the renderer draws on and the keyboard.

The game only needs a handful of operations from a terminal, captured by the
:class:`Screen` and :class:`Keyboard` protocols.  Front-ends implement both:
:mod:`termtris.run_curses` for terminals and :mod:`termtris.run_pygame` for a
window.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Protocol


class Color(IntEnum):
    """Sixteen colour console palette."""

    BLACK = 0
    BLUE = 1
    GREEN = 2
    CYAN = 3
    RED = 4
    MAGENTA = 5
    BROWN = 6
    GREY = 7
    DARKGREY = 8
    LIGHTBLUE = 9
    LIGHTGREEN = 10
    LIGHTCYAN = 11
    LIGHTRED = 12
    LIGHTMAGENTA = 13
    YELLOW = 14
    WHITE = 15

    @property
    def bright(self) -> bool:
        return self >= Color.DARKGREY


class Screen(Protocol):
    def locate(self, x: int, y: int) -> None: ...
    def set_color(self, color: Color) -> None: ...
    def reset_color(self) -> None: ...
    def write(self, text: str) -> None: ...
    def cls(self) -> None: ...
    def show_cursor(self) -> None: ...
    def hide_cursor(self) -> None: ...
    def msleep(self, ms: int) -> None: ...
    def refresh(self) -> None: ...


class Keyboard(Protocol):
    def kbhit(self) -> bool: ...
    def getkey(self) -> int: ...
