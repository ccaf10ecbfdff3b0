"""Key codes, key bindings and the name-entry state machine.

Console collaborators translate whatever their backend reports into the codes
below: printable ASCII arrives as its own code, special keys use the named
constants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from .config import DEFAULT_NAME, MAX_NAME_LENGTH


KEY_BACKSPACE = 8
KEY_ENTER = 13
KEY_ESCAPE = 27
KEY_SPACE = 32
KEY_DELETE = 127
KEY_UP = 256
KEY_DOWN = 257
KEY_LEFT = 258
KEY_RIGHT = 259

BACKSPACE_KEYS = (KEY_BACKSPACE, KEY_DELETE)
PRINTABLE_MIN = 32
PRINTABLE_MAX = 126


class Action(Enum):
    LEFT = auto()
    RIGHT = auto()
    SOFT_DROP = auto()
    ROTATE = auto()
    HARD_DROP = auto()
    HOLD = auto()
    PAUSE = auto()
    QUIT = auto()


KEY_BINDINGS = {
    KEY_LEFT: Action.LEFT,
    KEY_RIGHT: Action.RIGHT,
    KEY_DOWN: Action.SOFT_DROP,
    KEY_UP: Action.ROTATE,
    ord("z"): Action.ROTATE,
    ord("Z"): Action.ROTATE,
    KEY_SPACE: Action.HARD_DROP,
    ord("c"): Action.HOLD,
    ord("C"): Action.HOLD,
    ord("p"): Action.PAUSE,
    ord("P"): Action.PAUSE,
    KEY_ESCAPE: Action.QUIT,
}

CONTROLS_HELP = [
    "- [Arrow Keys] Move",
    "- [Up/Z] Rotate",
    "- [Down] Soft drop",
    "- [Space] Hard drop",
    "- [P] Pause",
    "- [C] Hold",
    "- [Esc] End game",
]


def action_for_key(key: Optional[int]) -> Optional[Action]:
    """Return the in-game action bound to ``key``, if any."""

    if key is None:
        return None
    return KEY_BINDINGS.get(key)


def is_printable(key: int) -> bool:
    return PRINTABLE_MIN <= key <= PRINTABLE_MAX


class EntryState(Enum):
    AWAITING_CHAR = auto()
    BACKSPACE = auto()
    SUBMITTED = auto()


@dataclass
class NameEntry:
    """Collect a player name one key at a time.

    The runner polls the keyboard each tick and feeds any key it gets to
    :meth:`feed`, so no call ever blocks waiting for input.  Enter submits,
    backspace (``8`` or ``127``) deletes the last character and printable
    ASCII is appended until ``max_length`` characters have been typed.
    Anything else is ignored.
    """

    max_length: int = MAX_NAME_LENGTH
    default_name: str = DEFAULT_NAME
    chars: List[str] = field(default_factory=list)
    state: EntryState = EntryState.AWAITING_CHAR

    @property
    def text(self) -> str:
        """What has been typed so far."""

        return "".join(self.chars)

    @property
    def done(self) -> bool:
        return self.state is EntryState.SUBMITTED

    @property
    def name(self) -> str:
        """The submitted name, falling back to ``default_name`` when empty."""

        return self.text or self.default_name

    def feed(self, key: int) -> EntryState:
        if self.done:
            return self.state
        if key == KEY_ENTER:
            self.state = EntryState.SUBMITTED
        elif key in BACKSPACE_KEYS:
            if self.chars:
                self.chars.pop()
            self.state = EntryState.BACKSPACE
        else:
            if is_printable(key) and len(self.chars) < self.max_length:
                self.chars.append(chr(key))
            self.state = EntryState.AWAITING_CHAR
        return self.state
