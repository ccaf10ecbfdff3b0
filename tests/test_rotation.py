from termtris.tetromino import PieceKind, Tetromino, rotate_index, shape_cells


def test_rotation_zero_is_row_major_identity():
    for py in range(4):
        for px in range(4):
            assert rotate_index(px, py, 0) == py * 4 + px


def test_each_rotation_is_a_permutation_of_the_mask():
    for r in range(4):
        indices = {rotate_index(px, py, r) for px in range(4) for py in range(4)}
        assert indices == set(range(16))


def test_rotation_is_periodic():
    for px in range(4):
        for py in range(4):
            for r in range(4):
                assert rotate_index(px, py, r) == rotate_index(px, py, r + 4)
                assert rotate_index(px, py, r) == rotate_index(px, py, r - 4)


def test_four_rotations_are_distinct_orientations():
    mappings = [
        tuple(rotate_index(px, py, r) for py in range(4) for px in range(4))
        for r in range(4)
    ]
    assert len(set(mappings)) == 4


def test_i_piece_orientations():
    assert shape_cells(PieceKind.I, 0) == [(2, 0), (2, 1), (2, 2), (2, 3)]
    assert sorted(shape_cells(PieceKind.I, 1)) == [(0, 2), (1, 2), (2, 2), (3, 2)]
    assert sorted(shape_cells(PieceKind.I, 2)) == [(1, 0), (1, 1), (1, 2), (1, 3)]
    assert sorted(shape_cells(PieceKind.I, 3)) == [(0, 1), (1, 1), (2, 1), (3, 1)]


def test_o_piece_is_rotation_invariant():
    expected = sorted(shape_cells(PieceKind.O, 0))
    for r in range(1, 4):
        assert sorted(shape_cells(PieceKind.O, r)) == expected


def test_every_piece_has_four_cells_in_every_rotation():
    for kind in PieceKind:
        for r in range(4):
            cells = shape_cells(kind, r)
            assert len(cells) == 4
            assert all(0 <= px < 4 and 0 <= py < 4 for px, py in cells)


def test_tetromino_blocks_follow_position_and_rotation():
    piece = Tetromino(PieceKind.I, rotation=0, x=4, y=0)
    assert piece.blocks() == [(6, 0), (6, 1), (6, 2), (6, 3)]
    piece.rotate()
    piece.move(1, 2)
    assert sorted(piece.blocks()) == [(5, 4), (6, 4), (7, 4), (8, 4)]
    piece.rotate(-1)
    assert piece.rotation == 0


def test_moved_returns_a_copy():
    piece = Tetromino(PieceKind.T, rotation=3, x=2, y=5)
    other = piece.moved(dx=-1, dy=1, turns=1)
    assert (other.x, other.y, other.rotation) == (1, 6, 0)
    assert (piece.x, piece.y, piece.rotation) == (2, 5, 3)
