from blockfall.game.validity import is_valid


def test_spawned_piece_is_valid_on_empty_grid(grid, o_factory):
    assert is_valid(o_factory.spawn(), grid)


def test_left_and_right_edges(grid, o_factory):
    piece = o_factory.spawn()
    assert is_valid(piece.moved(-4, 0), grid)
    assert not is_valid(piece.moved(-5, 0), grid)
    assert is_valid(piece.moved(4, 0), grid)
    assert not is_valid(piece.moved(5, 0), grid)


def test_floor(grid, o_factory):
    piece = o_factory.spawn()
    assert is_valid(piece.moved(0, 18), grid)
    assert not is_valid(piece.moved(0, 19), grid)


def test_rows_above_the_board_are_permitted(grid, o_factory):
    piece = o_factory.spawn()
    assert is_valid(piece.moved(0, -1), grid)
    assert is_valid(piece.moved(0, -10), grid)


def test_columns_are_checked_even_above_the_board(grid, o_factory):
    piece = o_factory.spawn().moved(-5, -3)
    assert not is_valid(piece, grid)


def test_overlap_with_locked_cell(grid, o_factory):
    grid.set_cell(1, 5, 3)
    assert not is_valid(o_factory.spawn(), grid)


def test_negative_rows_ignore_what_would_wrap_around(grid, o_factory):
    # A naive negative index would read row 19 here.
    grid.set_cell(19, 4, 1)
    assert is_valid(o_factory.spawn().moved(0, -1), grid)


def test_is_pure(grid, o_factory):
    grid.set_cell(10, 4, 2)
    before = grid.get_grid()
    piece = o_factory.spawn().moved(0, 9)
    results = [is_valid(piece, grid) for _ in range(5)]
    assert results == [False] * 5
    assert (grid.grid == before).all()
    assert (piece.x, piece.y) == (4, 9)
