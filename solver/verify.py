# solver/verify.py
from typing import List, Sequence, Tuple

from errors import ConsistencyFailure
from models import PuzzlePiece
from shapes import EMPTY, HOLE, OUTSIDE, TARGET, Block, count_cells, create_grid, same_shape, transform


def reconstruct_grid(grid: Sequence[Sequence[int]], pieces: Sequence[PuzzlePiece]) -> List[List[int]]:
    """Rebuild the board from the recorded solutions alone.

    Only OUTSIDE and HOLE cells are copied from ``grid``; every TARGET cell must
    come from replaying a piece's stored rotation/flip at its anchor.
    """
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    out = create_grid(rows, cols)
    for y in range(rows):
        for x in range(cols):
            if grid[y][x] in (OUTSIDE, HOLE):
                out[y][x] = grid[y][x]

    for p in pieces:
        shape = transform(p.original_shape, p.solution_rotation, p.solution_flipped)
        for bx, by in shape:
            x = p.solution_x + bx
            y = p.solution_y + by
            if x < 0 or x >= cols or y < 0 or y >= rows:
                raise ConsistencyFailure(f"piece {p.id} ({p.shape_name}) leaves the board at ({x},{y})")
            if out[y][x] != EMPTY:
                raise ConsistencyFailure(f"piece {p.id} ({p.shape_name}) collides at ({x},{y})")
            out[y][x] = TARGET
    return out


def verify_puzzle(grid: Sequence[Sequence[int]], pieces: Sequence[PuzzlePiece]) -> None:
    targets = count_cells(grid, TARGET)
    blocks = sum(len(p.original_shape) for p in pieces)
    if targets != blocks:
        raise ConsistencyFailure(f"target/blocks mismatch: targets={targets} blocks={blocks}")

    rebuilt = reconstruct_grid(grid, pieces)
    for y, row in enumerate(grid):
        if list(row) != rebuilt[y]:
            raise ConsistencyFailure(f"solution does not recreate target grid (row {y})")


def resolve_effective_transform(
    original: Sequence[Block],
    start_rotation: int,
    start_flipped: bool,
    solution_rotation: int,
    solution_flipped: bool,
) -> Tuple[int, bool]:
    """Find the (rotation, flipped) taking the start pose onto the solution pose."""
    start = transform(original, start_rotation, start_flipped)
    target = transform(original, solution_rotation, solution_flipped)
    for flipped in (False, True):
        for rotation in range(4):
            if same_shape(transform(start, rotation, flipped), target):
                return rotation, flipped
    raise ConsistencyFailure("no transform maps the start pose onto the solution")


__all__ = ["reconstruct_grid", "verify_puzzle", "resolve_effective_transform"]
