"""Tetromino definitions and basic behaviour.

Every piece is described by a 4x4 mask stored row-major as a 16 character
string, ``X`` for an occupied cell and ``.`` for an empty one.  Rotations are
never materialised as new masks; instead :func:`rotate_index` maps a cell of the
rotated box back onto the index of the unrotated mask.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

Cells = List[Tuple[int, int]]


class PieceKind(IntEnum):
    """Enumeration of the seven tetromino shapes.

    The integer value doubles as the index into :data:`SHAPES` and, plus one,
    as the colour tag written into the board when the piece locks.
    """

    I = 0
    T = 1
    O = 2
    Z = 3
    S = 4
    L = 5
    J = 6


SHAPES: Dict[PieceKind, str] = {
    PieceKind.I: "..X...X...X...X.",
    PieceKind.T: "..X..XX...X.....",
    PieceKind.O: ".....XX..XX.....",
    PieceKind.Z: "..X..XX..X......",
    PieceKind.S: ".X...XX...X.....",
    PieceKind.L: ".X...X...XX.....",
    PieceKind.J: "..X...X..XX.....",
}

ROTATIONS = 4


def rotate_index(px: int, py: int, rotation: int) -> int:
    """Return the mask index of cell ``(px, py)`` after ``rotation`` turns.

    ``rotation`` is taken modulo four: ``0`` is the identity, ``1`` a quarter
    turn clockwise, ``2`` a half turn and ``3`` a quarter turn
    counter-clockwise.
    """

    r = rotation % ROTATIONS
    if r == 0:
        return py * 4 + px
    if r == 1:
        return 12 + py - (px * 4)
    if r == 2:
        return 15 - (py * 4) - px
    return 3 - py + (px * 4)


def _occupied_cells(kind: PieceKind, rotation: int) -> Cells:
    mask = SHAPES[kind]
    return [
        (px, py)
        for py in range(4)
        for px in range(4)
        if mask[rotate_index(px, py, rotation)] != "."
    ]


# Occupied (px, py) offsets for every kind and rotation, derived once from the
# masks above.
TETROMINO_CELLS: Dict[PieceKind, Tuple[Cells, ...]] = {
    kind: tuple(_occupied_cells(kind, r) for r in range(ROTATIONS))
    for kind in PieceKind
}


def shape_cells(kind: PieceKind, rotation: int) -> Cells:
    """Return the occupied ``(px, py)`` offsets of ``kind`` at ``rotation``.

    Any integer rotation is accepted; it wraps modulo four.
    """

    return TETROMINO_CELLS[PieceKind(kind)][rotation % ROTATIONS]


@dataclass
class Tetromino:
    """Active falling piece in the game."""

    kind: PieceKind
    rotation: int = 0
    x: int = 0
    y: int = 0

    def rotate(self, direction: int = 1) -> None:
        self.rotation = (self.rotation + direction) % ROTATIONS

    def move(self, dx: int, dy: int) -> None:
        self.x += dx
        self.y += dy

    def moved(self, dx: int = 0, dy: int = 0, turns: int = 0) -> "Tetromino":
        """Return a copy translated by ``(dx, dy)`` and rotated ``turns`` times."""

        return replace(
            self,
            x=self.x + dx,
            y=self.y + dy,
            rotation=(self.rotation + turns) % ROTATIONS,
        )

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the board ``(x, y)`` coordinates covered by this piece."""

        return [(self.x + px, self.y + py) for px, py in shape_cells(self.kind, self.rotation)]
