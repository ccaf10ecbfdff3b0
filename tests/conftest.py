from collections import deque

import pytest

from termtris.console import Color


class FakeConsole:
    """Screen and keyboard stand-in driven by a scripted key list.

    ``None`` in the script means "no key available" for one poll, which lets
    tests separate keys typed before and after a prompt.
    """

    def __init__(self, keys=(), max_sleeps=10_000):
        self.keys = deque(keys)
        self.sleeps = []
        self.cells = {}
        self.cursor_visible = True
        self.clears = 0
        self.max_sleeps = max_sleeps
        self._x = 0
        self._y = 0
        self._color = None

    def locate(self, x, y):
        self._x, self._y = x, y

    def set_color(self, color):
        self._color = Color(color)

    def reset_color(self):
        self._color = None

    def write(self, text):
        self.cells[(self._x, self._y)] = (text, self._color)
        self._x += len(text)

    def cls(self):
        self.cells.clear()
        self.clears += 1

    def show_cursor(self):
        self.cursor_visible = True

    def hide_cursor(self):
        self.cursor_visible = False

    def refresh(self):
        pass

    def msleep(self, ms):
        self.sleeps.append(ms)
        assert len(self.sleeps) <= self.max_sleeps, "script ran out of keys"

    def kbhit(self):
        if self.keys and self.keys[0] is None:
            self.keys.popleft()
            return False
        return bool(self.keys)

    def getkey(self):
        return self.keys.popleft()

    def texts(self):
        return [text for text, _ in self.cells.values()]


@pytest.fixture
def make_console():
    return FakeConsole
