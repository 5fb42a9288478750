# shapes.py: piece catalog, board templates and shape algebra
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

Block = Tuple[int, int]   # (x, y)
Shape = Tuple[Block, ...]

# Cell codes shared by every grid in the project.
OUTSIDE = -2   # cut out of an irregular board
HOLE = -1      # blocked cell inside the board
EMPTY = 0
TARGET = 1

# Standard polyominoes, defined relative to (0, 0).
PIECE_DEFS: Dict[str, Shape] = {
    # 2 blocks
    "Domino": ((0, 0), (0, 1)),
    # 3 blocks
    "Line3": ((0, 0), (0, 1), (0, 2)),
    "Corner3": ((0, 0), (0, 1), (1, 1)),
    # 4 blocks
    "T": ((0, 0), (1, 0), (2, 0), (1, 1)),
    "L": ((0, 0), (0, 1), (0, 2), (1, 2)),
    "S": ((1, 0), (2, 0), (0, 1), (1, 1)),
    "Square": ((0, 0), (1, 0), (0, 1), (1, 1)),
    "Line4": ((0, 0), (0, 1), (0, 2), (0, 3)),
    # 5 blocks (pentomino subset)
    "C": ((0, 0), (0, 1), (0, 2), (1, 0), (1, 2)),
    "P": ((0, 0), (0, 1), (0, 2), (1, 0), (1, 1)),
    "L5": ((0, 0), (0, 1), (0, 2), (0, 3), (1, 3)),
    "W": ((0, 0), (1, 0), (1, 1), (1, 2), (2, 2)),
    "Y": ((0, 0), (0, 1), (1, 1), (0, 2), (0, 3)),
}

# easy: symmetric or simple; medium: slightly asymmetric; hard: tricky to place
PIECE_TIERS: Dict[str, Tuple[str, ...]] = {
    "easy": ("Domino", "Line3", "Square", "Line4"),
    "medium": ("Corner3", "T", "L"),
    "hard": ("S", "P", "L5", "W", "Y", "C"),
}

COLORS: Tuple[str, ...] = (
    "#F92672",
    "#00E5FF",
    "#A6E22E",
    "#FD971F",
    "#AE81FF",
    "#E6DB74",
    "#FF3333",
    "#F8F8F2",
)

# Irregular boards: base size plus cells cut out of the playable area.
BOARD_TEMPLATES: Dict[str, Dict[str, object]] = {
    # ##...
    # ##...
    # #####
    # #####
    # #####
    "L": {
        "rows": 5, "cols": 5,
        "cutouts": ((2, 0), (3, 0), (4, 0), (2, 1), (3, 1), (4, 1)),
    },
    # #####
    # #####
    # #####
    # .###.
    # .###.
    "T": {
        "rows": 5, "cols": 5,
        "cutouts": ((0, 3), (4, 3), (0, 4), (4, 4)),
    },
    # ..##..
    # ..##..
    # ######
    # ######
    # ..##..
    # ..##..
    "cross": {
        "rows": 6, "cols": 6,
        "cutouts": (
            (0, 0), (1, 0), (4, 0), (5, 0),
            (0, 1), (1, 1), (4, 1), (5, 1),
            (0, 4), (1, 4), (4, 4), (5, 4),
            (0, 5), (1, 5), (4, 5), (5, 5),
        ),
    },
    # ##.##
    # ##.##
    # #####
    # #####
    "U": {
        "rows": 4, "cols": 5,
        "cutouts": ((2, 0), (2, 1)),
    },
    # #....
    # ##...
    # ###..
    # ####.
    # #####
    "steps": {
        "rows": 5, "cols": 5,
        "cutouts": (
            (1, 0), (2, 0), (3, 0), (4, 0),
            (2, 1), (3, 1), (4, 1),
            (3, 2), (4, 2),
            (4, 3),
        ),
    },
}


# ---------- transforms ----------

def rotate(shape: Iterable[Block]) -> Shape:
    """Rotate 90° clockwise: (x, y) -> (-y, x)."""
    return tuple((-y, x) for x, y in shape)


def flip(shape: Iterable[Block]) -> Shape:
    """Mirror horizontally: (x, y) -> (-x, y)."""
    return tuple((-x, y) for x, y in shape)


def normalize(shape: Iterable[Block]) -> Shape:
    blocks = tuple(shape)
    if not blocks:
        return ()
    min_x = min(x for x, _ in blocks)
    min_y = min(y for _, y in blocks)
    return tuple((x - min_x, y - min_y) for x, y in blocks)


def transform(shape: Iterable[Block], rotation: int, flipped: bool) -> Shape:
    """Apply the canonical derivation: optional flip, then quarter turns, then normalize.

    The order matters (flip∘rotate differs from rotate∘flip), so every caller that
    records or replays a pose goes through here.
    """
    out = tuple(shape)
    if flipped:
        out = flip(out)
    for _ in range(int(rotation) % 4):
        out = rotate(out)
    return normalize(out)


def canonical_key(shape: Iterable[Block]) -> Shape:
    return tuple(sorted(normalize(shape)))


def free_key(shape: Iterable[Block]) -> Shape:
    """Key shared by every rotation and reflection of a shape."""
    return min(canonical_key(s) for _r, _f, s in all_orientations(shape))


def same_shape(a: Iterable[Block], b: Iterable[Block]) -> bool:
    return set(normalize(a)) == set(normalize(b))


def all_orientations(shape: Iterable[Block]) -> List[Tuple[int, bool, Shape]]:
    base = tuple(shape)
    out: List[Tuple[int, bool, Shape]] = []
    for flipped in (False, True):
        for rotation in range(4):
            out.append((rotation, flipped, transform(base, rotation, flipped)))
    return out


def unique_orientations(shape: Iterable[Block]) -> List[Tuple[int, bool, Shape]]:
    seen = set()
    out: List[Tuple[int, bool, Shape]] = []
    for rotation, flipped, oriented in all_orientations(shape):
        key = canonical_key(oriented)
        if key in seen:
            continue
        seen.add(key)
        out.append((rotation, flipped, oriented))
    return out


def shape_size(shape: Sequence[Block]) -> Tuple[int, int]:
    if not shape:
        return 0, 0
    return max(x for x, _ in shape) + 1, max(y for _, y in shape) + 1


# ---------- boards ----------

def create_grid(rows: int, cols: int, fill: int = EMPTY) -> List[List[int]]:
    return [[fill] * max(0, int(cols)) for _ in range(max(0, int(rows)))]


def build_board(rows: int, cols: int, irregular_shape_name: Optional[str] = None) -> List[List[int]]:
    """Blank rows×cols grid with the named template's cutouts marked OUTSIDE.

    Cutouts falling outside rows×cols are ignored; an unknown name gives a plain
    rectangle.
    """
    grid = create_grid(rows, cols)
    template = BOARD_TEMPLATES.get(irregular_shape_name or "")
    if not template:
        return grid
    for x, y in template["cutouts"]:  # type: ignore[union-attr]
        if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
            grid[y][x] = OUTSIDE
    return grid


def count_cells(grid: Sequence[Sequence[int]], code: int) -> int:
    return sum(1 for row in grid for cell in row if cell == code)


__all__ = [
    "Block", "Shape",
    "OUTSIDE", "HOLE", "EMPTY", "TARGET",
    "PIECE_DEFS", "PIECE_TIERS", "COLORS", "BOARD_TEMPLATES",
    "rotate", "flip", "normalize", "transform", "canonical_key", "free_key", "same_shape",
    "all_orientations", "unique_orientations", "shape_size",
    "create_grid", "build_board", "count_cells",
]
