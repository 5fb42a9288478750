# solver/holes.py
import random
from typing import List, Tuple

from shapes import EMPTY, HOLE


def hole_candidates(grid: List[List[int]]) -> List[Tuple[int, int]]:
    """Interior (non-edge) EMPTY cells, row-major."""
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    out: List[Tuple[int, int]] = []
    for y in range(1, rows - 1):
        for x in range(1, cols - 1):
            if grid[y][x] == EMPTY:
                out.append((x, y))
    return out


def _near(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1])) <= 1


def inject_holes(grid: List[List[int]], num_holes: int, rng: random.Random) -> List[Tuple[int, int]]:
    """Turn up to ``num_holes`` unused interior cells into HOLE, in place.

    No two holes end up 8-adjacent.  Returns the cells actually used, which may be
    fewer than requested.
    """
    wanted = max(0, int(num_holes))
    if wanted == 0:
        return []
    candidates = hole_candidates(grid)
    rng.shuffle(candidates)
    placed: List[Tuple[int, int]] = []
    for cell in candidates:
        if len(placed) >= wanted:
            break
        if any(_near(cell, other) for other in placed):
            continue
        placed.append(cell)
    for x, y in placed:
        grid[y][x] = HOLE
    return placed


__all__ = ["hole_candidates", "inject_holes"]
