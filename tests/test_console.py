import curses

from termtris.console import Color
from termtris.run_curses import translate_curses_key
from termtris.controls import KEY_BACKSPACE, KEY_DOWN, KEY_ENTER, KEY_RIGHT


def test_curses_keys_translate():
    assert translate_curses_key(curses.KEY_RIGHT) == KEY_RIGHT
    assert translate_curses_key(curses.KEY_DOWN) == KEY_DOWN
    assert translate_curses_key(10) == KEY_ENTER
    assert translate_curses_key(curses.KEY_BACKSPACE) == KEY_BACKSPACE
    assert translate_curses_key(ord("p")) == ord("p")
    assert translate_curses_key(127) == 127


def test_bright_half_of_palette():
    assert not Color.GREY.bright
    assert Color.DARKGREY.bright
    assert Color.WHITE.bright
