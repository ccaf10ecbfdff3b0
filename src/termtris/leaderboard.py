"""Persistent top-five scores.

The file format is one ``name score`` pair per line, whitespace separated.
Names are not escaped, so a name containing whitespace will not read back
correctly.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Union

from .config import MAX_HIGHSCORES, SCORE_FILE


LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Plain decimal only: no underscores, no non-ASCII digits.
_SCORE_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class HighScore:
    name: str
    score: int


def parse_scores(text: str) -> List[HighScore]:
    """Parse ``name score`` pairs from ``text``.

    Parsing stops at the first pair with a missing token or a score that is
    not an integer; everything read before that point is kept.
    """

    tokens = text.split()
    entries: List[HighScore] = []
    for i in range(0, len(tokens) - 1, 2):
        if not _SCORE_RE.fullmatch(tokens[i + 1]):
            break
        entries.append(HighScore(tokens[i], int(tokens[i + 1])))
    return entries


def format_scores(entries: Iterable[HighScore]) -> str:
    return "".join(f"{entry.name} {entry.score}\n" for entry in entries)


def _sorted(entries: Iterable[HighScore]) -> List[HighScore]:
    return sorted(entries, key=lambda entry: entry.score, reverse=True)


@dataclass
class Leaderboard:
    """Best scores kept sorted from highest to lowest."""

    path: Path = field(default_factory=lambda: Path(SCORE_FILE))
    entries: List[HighScore] = field(default_factory=list)
    capacity: int = MAX_HIGHSCORES

    @classmethod
    def load(cls, path: PathLike = SCORE_FILE, capacity: int = MAX_HIGHSCORES) -> "Leaderboard":
        """Read the leaderboard stored at ``path``.

        A missing or unreadable file gives an empty leaderboard.
        """

        path = Path(path)
        try:
            with open(path, encoding="utf-8") as fh:
                text = fh.read()
        except FileNotFoundError:
            LOGGER.debug("No leaderboard at %s yet", path)
            text = ""
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Could not read leaderboard %s: %s", path, exc)
            text = ""
        return cls(path=path, entries=_sorted(parse_scores(text)), capacity=capacity)

    def save(self) -> bool:
        """Overwrite the leaderboard file.  Returns ``False`` if writing failed."""

        try:
            with open(self.path, "w", encoding="utf-8") as fh:
                fh.write(format_scores(self.entries))
        except OSError as exc:
            LOGGER.warning("Could not write leaderboard %s: %s", self.path, exc)
            return False
        return True

    def qualifies(self, score: int) -> bool:
        """Return ``True`` if ``score`` earns a place on the board."""

        if len(self.entries) < self.capacity:
            return True
        return score > self.entries[-1].score

    def add(self, name: str, score: int) -> bool:
        """Insert ``name`` with ``score`` if it qualifies.

        The entries are re-sorted and trimmed to ``capacity`` afterwards.
        """

        if not self.qualifies(score):
            return False
        self.entries = _sorted([*self.entries, HighScore(name, score)])[: self.capacity]
        LOGGER.info("New high score: %s %d", name, score)
        return True

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
