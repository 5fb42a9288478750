from typing import List, Optional, Sequence

from models import PuzzlePiece
from shapes import EMPTY, HOLE, OUTSIDE, TARGET

_GLYPHS = {OUTSIDE: " ", HOLE: "o", EMPTY: ".", TARGET: "#"}
_LABELS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def render_grid(grid: Sequence[Sequence[int]], pieces: Optional[Sequence[PuzzlePiece]] = None) -> str:
    rows: List[List[str]] = [[_GLYPHS.get(c, "?") for c in row] for row in grid]
    for idx, p in enumerate(pieces or ()):
        label = _LABELS[idx % len(_LABELS)]
        for x, y in p.cells():
            if 0 <= y < len(rows) and 0 <= x < len(rows[y]) and grid[y][x] == TARGET:
                rows[y][x] = label
    return "\n".join("".join(r).rstrip() for r in rows)
