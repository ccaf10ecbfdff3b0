import random

import numpy as np
import pytest

from termtris.board import Board, CellTag, create_empty_grid
from termtris.tetromino import PieceKind, shape_cells


def test_empty_grid_has_walls_and_floor():
    grid = create_empty_grid(12, 22)
    assert grid.shape == (22, 12)
    assert np.all(grid[:, 0] == CellTag.WALL)
    assert np.all(grid[:, 11] == CellTag.WALL)
    assert np.all(grid[21, :] == CellTag.WALL)
    assert np.all(grid[:21, 1:11] == CellTag.EMPTY)


def test_get_cell_returns_tags_and_rejects_out_of_bounds():
    board = Board()
    assert board.get_cell(0, 0) is CellTag.WALL
    assert board.get_cell(5, 5) is CellTag.EMPTY
    with pytest.raises(IndexError):
        board.get_cell(12, 0)
    with pytest.raises(IndexError):
        board.set_cell(-1, 0, CellTag.I)


def test_cell_tag_piece_mapping():
    for kind in PieceKind:
        assert CellTag.for_piece(kind).piece is kind
        assert int(CellTag.for_piece(kind)) == int(kind) + 1
    with pytest.raises(ValueError):
        CellTag.WALL.piece


def test_fits_ignores_empty_mask_cells_outside_the_board():
    board = Board()
    # Row 0 of the O mask is empty, so the box may start above the board.
    assert board.fits(PieceKind.O, 0, 4, -1)
    # Row 0 of the I mask is occupied.
    assert not board.fits(PieceKind.I, 0, 4, -1)
    # The I mask only uses column 2 at rotation 0.
    assert board.fits(PieceKind.I, 0, -1, 0)
    assert not board.fits(PieceKind.I, 0, -2, 0)
    assert not board.fits(PieceKind.I, 0, -3, 0)


def test_fits_matches_bounds_and_occupancy_everywhere():
    board = Board()
    rng = random.Random(3)
    for _ in range(30):
        board.set_cell(rng.randrange(1, 11), rng.randrange(0, 21), CellTag.T)

    for kind in PieceKind:
        for rotation in range(4):
            for x in range(-4, 13):
                for y in range(-4, 23):
                    expected = all(
                        0 <= x + px < board.width
                        and 0 <= y + py < board.height
                        and board.grid[y + py, x + px] == CellTag.EMPTY
                        for px, py in shape_cells(kind, rotation)
                    )
                    assert board.fits(kind, rotation, x, y) == expected


def test_lock_writes_piece_tag_and_nothing_else():
    for kind in PieceKind:
        for rotation in range(4):
            for x, y in [(-1, 0), (0, 5), (4, 0), (7, 17), (8, 10)]:
                board = Board()
                if not board.fits(kind, rotation, x, y):
                    continue
                before = board.grid.copy()
                board.lock_piece(kind, rotation, x, y)
                covered = {(x + px, y + py) for px, py in shape_cells(kind, rotation)}
                for cy in range(board.height):
                    for cx in range(board.width):
                        if (cx, cy) in covered:
                            assert board.get_cell(cx, cy) is CellTag.for_piece(kind)
                        else:
                            assert board.grid[cy, cx] == before[cy, cx]
                assert board.borders_intact()


def test_lock_rejects_a_placement_that_does_not_fit():
    board = Board()
    with pytest.raises(ValueError):
        board.lock_piece(PieceKind.I, 0, 4, 19)


def fill_row(board, y, tag=CellTag.T, gap=None):
    for x in range(1, board.width - 1):
        if x != gap:
            board.set_cell(x, y, tag)


def test_mark_complete_rows_only_scans_four_rows_above_the_floor():
    board = Board()
    fill_row(board, 20)
    fill_row(board, 10)
    assert board.mark_complete_rows(18) == [20]
    assert all(board.get_cell(x, 20) is CellTag.CLEARING for x in range(1, 11))
    assert board.get_cell(0, 20) is CellTag.WALL
    # Row 10 is complete but outside the scanned span.
    assert board.get_cell(5, 10) is CellTag.T


def test_floor_is_never_marked():
    board = Board()
    assert board.mark_complete_rows(20) == []
    assert board.mark_complete_rows(21) == []
    assert board.borders_intact()


def test_incomplete_row_is_not_marked():
    board = Board()
    fill_row(board, 20, gap=6)
    assert board.mark_complete_rows(17) == []
    assert board.get_cell(1, 20) is CellTag.T


def test_collapse_non_adjacent_rows():
    board = Board()
    fill_row(board, 18)
    fill_row(board, 20)
    board.set_cell(3, 19, CellTag.I)
    board.set_cell(4, 17, CellTag.O)

    assert board.mark_complete_rows(17) == [18, 20]
    board.collapse_rows([18, 20])

    assert board.get_cell(3, 20) is CellTag.I
    assert board.get_cell(4, 19) is CellTag.O
    occupied = [
        (x, y)
        for y in range(board.height - 1)
        for x in range(1, board.width - 1)
        if board.get_cell(x, y) is not CellTag.EMPTY
    ]
    assert sorted(occupied) == [(3, 20), (4, 19)]
    assert board.borders_intact()


def test_collapse_empties_the_top_row():
    board = Board()
    board.set_cell(2, 0, CellTag.S)
    fill_row(board, 20)
    board.mark_complete_rows(20)
    board.collapse_rows([20])
    assert board.get_cell(2, 0) is CellTag.EMPTY
    assert board.get_cell(2, 1) is CellTag.S
    assert board.get_cell(0, 0) is CellTag.WALL
