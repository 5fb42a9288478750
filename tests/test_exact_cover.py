import pytest

from shapes import PIECE_DEFS
from solver.exact_cover import (
    OrientationCache,
    SearchStats,
    count_solutions,
)


def test_domino_on_two_cells():
    grid = [[1, 1], [0, 0]]
    assert count_solutions(grid, ["Domino"], 10) == 1


def test_unsolvable_strip_with_square():
    grid = [[1, 1, 1]]
    assert count_solutions(grid, ["Square"], 10) == 0


def test_two_dominoes_on_square_counts_each_tiling_once():
    grid = [[1, 1], [1, 1]]
    assert count_solutions(grid, ["Domino", "Domino"], 20) == 2


def test_three_lines_on_three_by_three():
    grid = [[1] * 3 for _ in range(3)]
    assert count_solutions(grid, ["Line3"] * 3, 20) == 2


def test_four_long_lines_on_four_by_four():
    grid = [[1] * 4 for _ in range(4)]
    assert count_solutions(grid, ["Line4"] * 4, 20) == 2


def test_l_piece_in_l_region():
    grid = [[1, 1], [1, 0], [1, 0]]
    assert count_solutions(grid, [PIECE_DEFS["L"]], 10) == 1


def test_mixed_pieces_on_two_by_four():
    # Domino + Square + Domino on a 2x4: square at either end (2 ways each) or in the middle
    grid = [[1, 1, 1, 1], [1, 1, 1, 1]]
    found = count_solutions(grid, ["Domino", "Square", "Domino"], 50)
    assert found == 5


def test_limit_caps_result():
    grid = [[1] * 4 for _ in range(4)]
    assert count_solutions(grid, ["Domino"] * 8, 5) == 5
    assert count_solutions(grid, ["Domino"] * 8, 0) == 0


def test_limit_one_stops_at_first_solution():
    grid = [[1] * 4 for _ in range(4)]
    pieces = ["Domino"] * 8

    first = SearchStats()
    assert count_solutions(grid, pieces, 1, stats=first) == 1
    assert first.solutions == 1
    assert first.limit_hit is True

    more = SearchStats()
    assert count_solutions(grid, pieces, 30, stats=more) == 30
    assert more.solutions == 30
    assert first.nodes < more.nodes


def test_area_mismatch_is_zero():
    grid = [[1, 1, 1, 1]]
    assert count_solutions(grid, ["Domino"], 10) == 0


def test_holes_and_outside_cells_are_not_covered():
    grid = [
        [1, 1, -1],
        [1, 1, -2],
    ]
    assert count_solutions(grid, ["Square"], 10) == 1
    assert count_solutions(grid, ["Line3", "Domino"], 10) == 0


def test_accepts_piece_like_objects_and_dicts():
    class _Piece:
        original_shape = PIECE_DEFS["Domino"]

    grid = [[1, 1], [1, 1]]
    pieces = [_Piece(), {"originalShape": [{"x": 0, "y": 0}, {"x": 1, "y": 0}]}]
    assert count_solutions(grid, pieces, 10) == 2


def test_rejects_unknown_values():
    with pytest.raises(TypeError):
        count_solutions([[1]], [object()], 10)


def test_orientation_cache_is_keyed_by_canonical_shape():
    cache = OrientationCache()
    a = cache.get(PIECE_DEFS["L"])
    b = cache.get(tuple(reversed(PIECE_DEFS["L"])))
    assert a is b
    assert len(cache) == 1
    assert PIECE_DEFS["L"] in cache
    assert len(a) == 8

    grid = [[1, 1], [1, 1]]
    count_solutions(grid, ["Square"], 10, cache=cache)
    assert len(cache) == 2
