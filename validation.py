"""Grid checks shared by the generator and by anything replaying a puzzle."""

from __future__ import annotations

from collections import deque
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from shapes import EMPTY, OUTSIDE, TARGET, Block

Grid = Sequence[Sequence[int]]
Placement = Tuple[Sequence[Block], int, int]  # (shape, x, y)


def _dims(grid: Grid) -> Tuple[int, int]:
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    return rows, cols


def can_place(grid: Grid, shape: Iterable[Block], x: int, y: int) -> bool:
    """True when every block lands in bounds on an EMPTY cell."""
    rows, cols = _dims(grid)
    for bx, by in shape:
        gx = x + bx
        gy = y + by
        if gx < 0 or gx >= cols or gy < 0 or gy >= rows:
            return False
        if grid[gy][gx] != EMPTY:
            return False
    return True


def place(grid: List[List[int]], shape: Iterable[Block], x: int, y: int, value: int = TARGET) -> None:
    for bx, by in shape:
        grid[y + by][x + bx] = value


def touches(grid: Grid, shape: Iterable[Block], x: int, y: int, code: int = TARGET) -> bool:
    """True when some block is 4-adjacent to a cell holding ``code``."""
    rows, cols = _dims(grid)
    for bx, by in shape:
        gx = x + bx
        gy = y + by
        for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nx = gx + dx
            ny = gy + dy
            if 0 <= nx < cols and 0 <= ny < rows and grid[ny][nx] == code:
                return True
    return False


def _occupied(others: Iterable[Placement]) -> Set[Tuple[int, int]]:
    cells: Set[Tuple[int, int]] = set()
    for shape, ox, oy in others:
        for bx, by in shape:
            cells.add((ox + bx, oy + by))
    return cells


def is_valid_placement(
    shape: Sequence[Block],
    x: int,
    y: int,
    grid: Grid,
    others: Optional[Iterable[Placement]] = None,
) -> bool:
    """Whether a player may drop ``shape`` at (x, y) on the target region."""
    if not shape:
        return False
    rows, cols = _dims(grid)
    if rows == 0 or cols == 0:
        return False
    taken = _occupied(others or ())
    for bx, by in shape:
        gx = x + bx
        gy = y + by
        if gx < 0 or gx >= cols or gy < 0 or gy >= rows:
            return False
        if grid[gy][gx] != TARGET:
            return False
        if (gx, gy) in taken:
            return False
    return True


def check_win(grid: Grid, placements: Iterable[Placement]) -> bool:
    """Every TARGET cell covered exactly once and nothing anywhere else."""
    rows, cols = _dims(grid)
    if rows == 0 or cols == 0:
        return False
    cover = [[0] * cols for _ in range(rows)]
    for shape, x, y in placements:
        for bx, by in shape:
            gx = x + bx
            gy = y + by
            if gx < 0 or gx >= cols or gy < 0 or gy >= rows:
                return False
            cover[gy][gx] += 1
    for gy in range(rows):
        for gx in range(cols):
            c = cover[gy][gx]
            if c > 1:
                return False
            if grid[gy][gx] == TARGET and c != 1:
                return False
            if grid[gy][gx] != TARGET and c != 0:
                return False
    return True


def find_enclosed_cells(grid: Grid) -> Set[Tuple[int, int]]:
    """Non-target cells that cannot reach the board edge without crossing a target.

    OUTSIDE cells are never reported, but they do conduct: a cell next to a
    cutout is as open as one on the border.
    """
    rows, cols = _dims(grid)
    open_cells: Set[Tuple[int, int]] = set()
    queue: deque = deque()
    for gy in range(rows):
        for gx in range(cols):
            if grid[gy][gx] == TARGET:
                continue
            if gx == 0 or gy == 0 or gx == cols - 1 or gy == rows - 1:
                open_cells.add((gx, gy))
                queue.append((gx, gy))
    while queue:
        cx, cy = queue.popleft()
        for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nx = cx + dx
            ny = cy + dy
            if nx < 0 or ny < 0 or nx >= cols or ny >= rows:
                continue
            if (nx, ny) in open_cells or grid[ny][nx] == TARGET:
                continue
            open_cells.add((nx, ny))
            queue.append((nx, ny))
    enclosed: Set[Tuple[int, int]] = set()
    for gy in range(rows):
        for gx in range(cols):
            cell = grid[gy][gx]
            if cell == TARGET or cell == OUTSIDE:
                continue
            if (gx, gy) not in open_cells:
                enclosed.add((gx, gy))
    return enclosed


__all__ = [
    "can_place", "place", "touches",
    "is_valid_placement", "check_win", "find_enclosed_cells",
]
