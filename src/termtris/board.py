"""Board representation for the playfield.

The grid includes its own walls: column ``0``, column ``width - 1`` and row
``height - 1`` hold :attr:`CellTag.WALL` for the whole round so collision
checks never need a separate bounds test for the sides and floor.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List

import numpy as np
from numpy.typing import NDArray

from .config import FIELD_HEIGHT, FIELD_WIDTH
from .tetromino import PieceKind, shape_cells


Grid = NDArray[np.uint8]


class CellTag(IntEnum):
    """Value stored in a board cell."""

    EMPTY = 0
    I = 1
    T = 2
    O = 3
    Z = 4
    S = 5
    L = 6
    J = 7
    CLEARING = 8
    WALL = 9

    @classmethod
    def for_piece(cls, kind: PieceKind) -> "CellTag":
        return cls(int(kind) + 1)

    @property
    def piece(self) -> PieceKind:
        """Return the piece kind a colour tag belongs to.

        Raises:
            ValueError: If the tag is not a piece colour.
        """
        if not CellTag.I <= self <= CellTag.J:
            raise ValueError(f"{self.name} is not a piece tag")
        return PieceKind(int(self) - 1)


def create_empty_grid(width: int = FIELD_WIDTH, height: int = FIELD_HEIGHT) -> Grid:
    """Return a new grid with walls on the sides and floor and an empty interior."""

    grid = np.zeros((height, width), dtype=np.uint8)
    grid[:, 0] = CellTag.WALL
    grid[:, width - 1] = CellTag.WALL
    grid[height - 1, :] = CellTag.WALL
    return grid


class Board:
    """Playfield holding walls, locked cells and rows waiting to be cleared."""

    def __init__(self, width: int = FIELD_WIDTH, height: int = FIELD_HEIGHT) -> None:
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> CellTag:
        """Safely return the tag at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(x, y):
            return CellTag(int(self.grid[y, x]))
        raise IndexError("Cell out of bounds")

    def set_cell(self, x: int, y: int, tag: CellTag) -> None:
        """Safely set the tag at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(x, y):
            self.grid[y, x] = np.uint8(CellTag(tag))
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, x: int, y: int) -> bool:
        """Return ``True`` if the cell at ``(x, y)`` is empty.

        Coordinates outside the board are treated as occupied.
        """

        if self.in_bounds(x, y):
            return bool(self.grid[y, x] == CellTag.EMPTY)
        return False

    def fits(self, kind: PieceKind, rotation: int, x: int, y: int) -> bool:
        """Return ``True`` if ``kind`` at ``rotation`` can sit with its box at ``(x, y)``.

        Every occupied cell of the piece must land inside the board on an
        empty cell.  This is the only collision test in the engine: moves,
        rotations, gravity, hard drops, holds and spawns are all validated
        through it.
        """

        for px, py in shape_cells(kind, rotation):
            if not self.is_empty(x + px, y + py):
                return False
        return True

    def lock_piece(self, kind: PieceKind, rotation: int, x: int, y: int) -> None:
        """Write the piece's colour tag into every cell it covers.

        Raises:
            ValueError: If the placement does not fit.
        """

        if not self.fits(kind, rotation, x, y):
            raise ValueError("Cannot lock a piece that does not fit")
        tag = np.uint8(CellTag.for_piece(kind))
        for px, py in shape_cells(kind, rotation):
            self.grid[y + py, x + px] = tag

    def row_complete(self, y: int) -> bool:
        """Return ``True`` if every interior cell of row ``y`` is filled."""

        return bool(np.all(self.grid[y, 1 : self.width - 1] != CellTag.EMPTY))

    def mark_complete_rows(self, top: int) -> List[int]:
        """Tag completed rows among the four starting at ``top`` for clearing.

        Only rows a piece whose box starts at ``top`` could have touched are
        examined, and the floor is never one of them.  Interior cells of each
        complete row become :attr:`CellTag.CLEARING`.  Returns the marked row
        indices in ascending order.
        """

        marked: List[int] = []
        for y in range(max(top, 0), min(top + 4, self.height - 1)):
            if self.row_complete(y):
                self.grid[y, 1 : self.width - 1] = CellTag.CLEARING
                marked.append(y)
        return marked

    def collapse_rows(self, rows: Iterable[int]) -> None:
        """Remove ``rows`` and drop everything above them.

        Rows must be processed top to bottom: removing a row only moves the
        rows above it, so lower indices stay valid.
        """

        inner = slice(1, self.width - 1)
        for y in sorted(rows):
            if y <= 0:
                self.grid[0, inner] = CellTag.EMPTY
                continue
            self.grid[1 : y + 1, inner] = self.grid[0:y, inner].copy()
            self.grid[0, inner] = CellTag.EMPTY

    def borders_intact(self) -> bool:
        """Return ``True`` if the wall and floor cells still hold :attr:`CellTag.WALL`."""

        wall = np.uint8(CellTag.WALL)
        return bool(
            np.all(self.grid[:, 0] == wall)
            and np.all(self.grid[:, self.width - 1] == wall)
            and np.all(self.grid[self.height - 1, :] == wall)
        )
