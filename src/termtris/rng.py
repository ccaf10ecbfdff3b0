"""Piece randomizer.

Kinds are drawn uniformly with replacement.  There is deliberately no 7-bag:
droughts and long repeats can happen, which is how the game has always played.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional, Protocol

from .tetromino import PieceKind


class PieceSource(Protocol):
    def next_kind(self) -> PieceKind: ...


class UniformPieceSource:
    """Uniform random piece kinds, reproducible when ``seed`` is given."""

    def __init__(self, seed: Optional[int] = None, *, rng: Optional[random.Random] = None):
        self._rng = rng if rng is not None else random.Random(seed)

    def next_kind(self) -> PieceKind:
        return PieceKind(self._rng.randrange(len(PieceKind)))


class SequencePieceSource:
    """Replay a fixed sequence of kinds, cycling when it runs out.

    Useful for deterministic games such as replays and tests.
    """

    def __init__(self, kinds: Iterable[PieceKind]):
        self._kinds = [PieceKind(k) for k in kinds]
        if not self._kinds:
            raise ValueError("SequencePieceSource needs at least one kind")
        self._pos = 0

    def next_kind(self) -> PieceKind:
        kind = self._kinds[self._pos % len(self._kinds)]
        self._pos += 1
        return kind
