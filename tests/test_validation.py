from shapes import PIECE_DEFS, create_grid
from validation import can_place, check_win, find_enclosed_cells, is_valid_placement, place, touches

DOMINO_V = PIECE_DEFS["Domino"]
DOMINO_H = ((0, 0), (1, 0))
SQUARE = PIECE_DEFS["Square"]


# ---------- construction helpers ----------

def test_can_place_needs_empty_in_bounds_cells():
    grid = create_grid(3, 3)
    assert can_place(grid, SQUARE, 1, 1)
    assert not can_place(grid, SQUARE, 2, 2)
    assert not can_place(grid, SQUARE, -1, 0)
    grid[1][1] = -1
    assert not can_place(grid, SQUARE, 0, 0)


def test_place_and_touches():
    grid = create_grid(3, 4)
    place(grid, DOMINO_V, 0, 0)
    assert grid[0][0] == 1 and grid[1][0] == 1
    assert touches(grid, DOMINO_V, 1, 1)
    # diagonal contact does not count
    assert not touches(grid, ((0, 0),), 1, 2)
    assert not touches(grid, DOMINO_V, 2, 0)


# ---------- player moves ----------

def test_is_valid_placement_on_target_region():
    grid = [
        [1, 1, 0],
        [1, 1, -1],
    ]
    assert is_valid_placement(SQUARE, 0, 0, grid)
    assert not is_valid_placement(SQUARE, 1, 0, grid)
    assert not is_valid_placement(DOMINO_H, 2, 0, grid)
    assert not is_valid_placement((), 0, 0, grid)
    assert not is_valid_placement(SQUARE, 0, 0, [])


def test_is_valid_placement_rejects_overlap():
    grid = [[1, 1, 1, 1]]
    others = [(DOMINO_H, 0, 0)]
    assert is_valid_placement(DOMINO_H, 2, 0, grid, others)
    assert not is_valid_placement(DOMINO_H, 1, 0, grid, others)


def test_check_win_exact_cover():
    grid = [
        [1, 1, 1],
        [1, 1, 1],
    ]
    assert check_win(grid, [(SQUARE, 0, 0), (DOMINO_V, 2, 0)])
    # gap
    assert not check_win(grid, [(SQUARE, 0, 0)])
    # overlap
    assert not check_win(grid, [(SQUARE, 0, 0), (DOMINO_V, 1, 0), (DOMINO_V, 2, 0)])
    # off board
    assert not check_win(grid, [(SQUARE, 0, 0), (DOMINO_V, 3, 0)])


def test_check_win_rejects_cover_outside_target():
    grid = [
        [1, 1, 0],
        [1, 1, 0],
    ]
    assert check_win(grid, [(SQUARE, 0, 0)])
    assert not check_win(grid, [(SQUARE, 0, 0), (DOMINO_V, 2, 0)])
    assert not check_win([], [])


# ---------- enclosed cells ----------

def test_single_enclosed_cell():
    grid = [
        [1, 1, 1],
        [1, 0, 1],
        [1, 1, 1],
    ]
    assert find_enclosed_cells(grid) == {(1, 1)}


def test_edge_cells_are_never_enclosed():
    grid = [
        [0, 1, 1],
        [1, 1, 1],
        [1, 1, 1],
    ]
    assert find_enclosed_cells(grid) == set()


def test_cells_with_path_to_edge_are_open():
    grid = [
        [0, 0, 1],
        [1, 0, 1],
        [1, 1, 1],
    ]
    assert find_enclosed_cells(grid) == set()

    grid = [
        [0, 1, 1, 1],
        [0, 1, 1, 1],
        [0, 0, 0, 1],
        [1, 1, 1, 1],
    ]
    assert find_enclosed_cells(grid) == set()


def test_connected_enclosed_regions():
    grid = [
        [1, 1, 1, 1],
        [1, 0, 0, 1],
        [1, 1, 1, 1],
    ]
    assert find_enclosed_cells(grid) == {(1, 1), (2, 1)}

    grid = [
        [1, 1, 1, 1],
        [1, 0, 1, 1],
        [1, 0, 0, 1],
        [1, 1, 1, 1],
    ]
    assert find_enclosed_cells(grid) == {(1, 1), (1, 2), (2, 2)}


def test_outside_cells_conduct_but_are_not_reported():
    grid = [
        [-2, 1, 1],
        [0, 1, 1],
        [1, 1, 1],
    ]
    assert find_enclosed_cells(grid) == set()

    grid = [
        [1, 1, 1, 1, 1],
        [1, -2, 0, -1, 1],
        [1, 1, 1, 1, 1],
    ]
    # cutout inside a closed ring is enclosed space, yet only non-cutouts are reported
    assert find_enclosed_cells(grid) == {(2, 1), (3, 1)}
